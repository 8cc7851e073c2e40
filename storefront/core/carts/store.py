import json
import logging
from time import time
from typing import Callable, List

from storefront.config import CART_TTL_SECONDS
from storefront.core.carts.models import CartLine

log = logging.getLogger(__name__)

STORAGE_KEY = "cart"
EXPIRATION_KEY = "cartExpiration"


class CartStore:
    """Sobre persistido del carrito con TTL deslizante y expiración perezosa.

    El almacenamiento se trata como un recurso no confiable: cualquier fallo
    degrada a "carrito vacío" en vez de propagarse al llamador.
    """

    def __init__(self, storage, ttl_seconds: int = CART_TTL_SECONDS, clock: Callable[[], float] = time):
        self.storage = storage
        self.ttl = ttl_seconds
        self.clock = clock

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def load(self) -> List[CartLine]:
        try:
            raw_cart = self.storage.get(STORAGE_KEY)
            raw_expiration = self.storage.get(EXPIRATION_KEY)
        except Exception as err:
            log.warning(f"No se pudo leer el carrito ({err}). Se asume vacío.")
            return []

        if not raw_cart or not raw_expiration:
            return []

        try:
            expires_at = int(raw_expiration)
        except (TypeError, ValueError):
            log.warning(f"Expiración corrupta en el carrito: {raw_expiration!r}")
            return []

        if self._now_ms() > expires_at:
            log.info(f"Carrito {getattr(self.storage, 'namespace', '')} expirado. Se elimina.")
            self.clear()
            return []

        try:
            data = json.loads(raw_cart)
            return [CartLine.from_dict(line) for line in data]
        except (ValueError, KeyError, TypeError, AttributeError) as err:
            log.warning(f"Carrito corrupto ({err}). Se asume vacío.")
            return []

    def save(self, cart: List[CartLine]) -> List[CartLine]:
        try:
            self.storage.set_many({
                STORAGE_KEY: json.dumps([line.to_dict() for line in cart]),
                EXPIRATION_KEY: str(self._now_ms() + self.ttl * 1000),
            })
        except Exception as err:
            log.error(f"No se pudo guardar el carrito ({err}).")
            return []
        return cart

    def clear(self) -> None:
        try:
            self.storage.delete(STORAGE_KEY, EXPIRATION_KEY)
        except Exception as err:
            log.warning(f"No se pudo eliminar el carrito ({err}).")
