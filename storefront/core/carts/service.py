import copy
import logging
from typing import List, Mapping, Optional

from storefront.config import REDIS_URL
from storefront.core.carts.identity import default_selection, identity_of, is_valid_selection
from storefront.core.carts.models import CartLine, Money, Product
from storefront.core.carts.store import CartStore
from storefront.core.carts.store_memory import MemoryStorage
from storefront.core.carts.store_redis import RedisStorage

log = logging.getLogger(__name__)


class CartLineNotFound(LookupError):
    """La línea pedida no existe en el carrito persistido."""


class InvalidProductError(ValueError):
    """Producto sin id, precio o galería."""


class InvalidSelectionError(ValueError):
    """Atributo que el producto no tiene, o valor fuera de sus opciones."""


def open_storage(redis_url: str = REDIS_URL, client=None):
    # Intenta Redis y si falla usa memoria (para dev/local sin Redis).
    try:
        storage = RedisStorage(url=redis_url, client=client)
        storage.client.ping()
        log.info("Carrito usando Redis.")
        return storage
    except Exception as err:
        log.warning(f"No se pudo conectar a Redis ({err}). Usando carrito en memoria.")
        return MemoryStorage()


class CartService:
    """Operaciones del carrito: cada una lee, modifica y persiste de inmediato.

    No se guarda carrito en memoria entre llamadas; dos escrituras concurrentes
    sobre el mismo visitante se resuelven por la última que escribe.
    """

    def __init__(self, store: CartStore):
        self.store = store

    def read(self) -> List[CartLine]:
        return self.store.load()

    def add(self, product: Product, selected_attributes: Optional[Mapping[str, str]] = None) -> List[CartLine]:
        if not product or not product.id or product.price is None or not product.gallery:
            raise InvalidProductError("El producto necesita id, precio y galería")

        selection = dict(selected_attributes or {})
        if not is_valid_selection(product, selection):
            raise InvalidSelectionError(f"Selección inválida para {product.id}: {selection}")
        key = identity_of(product.id, selection)
        cart = self.read()

        existing = next((line for line in cart if line.identity_key == key), None)
        if existing:
            # Se conserva el precio/imagen capturados al agregar la primera vez.
            existing.quantity += 1
        else:
            cart.append(CartLine(
                identity_key=key,
                product_id=product.id,
                name=product.name,
                price=Money(
                    amount=product.price.amount,
                    currency_symbol=product.price.currency_symbol,
                    currency_label=product.price.currency_label,
                ),
                quantity=1,
                image=product.gallery[0],
                selected_attributes=selection,
                all_attributes=copy.deepcopy(product.attributes),
            ))
        log.info(f"Item {key} agregado al carrito")
        return self.store.save(cart)

    def quick_add(self, product: Product) -> List[CartLine]:
        return self.add(product, default_selection(product))

    def change_quantity(self, identity_key: str, delta: int) -> List[CartLine]:
        cart = self.read()
        for index, line in enumerate(cart):
            if line.identity_key == identity_key:
                return self._apply_delta(cart, index, delta)
        raise CartLineNotFound(f"No hay línea {identity_key!r} en el carrito")

    def change_quantity_at(self, index: int, delta: int) -> List[CartLine]:
        """Versión por posición, solo por compatibilidad.

        La posición puede cambiar entre la lectura del llamador y esta llamada;
        preferir ``change_quantity`` con la clave de identidad.
        """
        cart = self.read()
        if not 0 <= index < len(cart):
            raise CartLineNotFound(f"Índice {index} fuera de rango (carrito de {len(cart)} líneas)")
        return self._apply_delta(cart, index, delta)

    def _apply_delta(self, cart: List[CartLine], index: int, delta: int) -> List[CartLine]:
        line = cart[index]
        new_qty = line.quantity + delta
        if new_qty <= 0:
            cart.pop(index)
            log.info(f"Item {line.identity_key} eliminado del carrito")
        else:
            line.quantity = new_qty
        return self.store.save(cart)

    def clear(self) -> None:
        self.store.clear()
        log.info("Carrito vaciado")
