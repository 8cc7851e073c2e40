import logging
from decimal import Decimal
from typing import List, Optional

from storefront.core.carts.models import CartLine
from storefront.core.carts.service import CartService
from storefront.core.catalog import CatalogClient, CatalogError
from storefront.core.pricing import items_count, items_label, total_price
from storefront.utils.logger import log_order

log = logging.getLogger(__name__)


class OrderSubmissionError(Exception):
    """La orden no pudo enviarse; el carrito queda intacto para reintentar."""


class OverlaySession:
    """Vista del carrito con copia tomada al abrirse (flanco oculto -> visible).

    Mientras sigue abierta no se refresca ante cambios externos; reabrir vuelve
    a sincronizar.
    """

    def __init__(self, service: CartService, catalog: CatalogClient, session_id: str = ""):
        self.service = service
        self.catalog = catalog
        self.session_id = session_id
        self.visible = False
        self.items: List[CartLine] = []
        self.error: Optional[str] = None

    def set_visible(self, visible: bool) -> None:
        if visible and not self.visible:
            self.items = self.service.read()
            self.error = None
        self.visible = visible

    def open(self) -> None:
        self.set_visible(True)

    def close(self) -> None:
        self.set_visible(False)

    def change_quantity(self, identity_key: str, delta: int) -> List[CartLine]:
        self.items = self.service.change_quantity(identity_key, delta)
        return self.items

    def change_quantity_at(self, index: int, delta: int) -> List[CartLine]:
        self.items = self.service.change_quantity_at(index, delta)
        return self.items

    @property
    def total_price(self) -> Decimal:
        return total_price(self.items)

    @property
    def items_count(self) -> int:
        return items_count(self.items)

    @property
    def items_label(self) -> str:
        return items_label(self.items_count)

    def _record(self, cart: List[CartLine], status: str, detail) -> None:
        # El historial no debe cambiar el resultado de la orden.
        try:
            log_order(self.session_id, cart, status=status, detail=detail)
        except OSError as err:
            log.warning(f"No se pudo escribir el historial de órdenes ({err}).")

    async def place_order(self, token: Optional[str] = None) -> Optional[dict]:
        if not self.items:
            return None

        try:
            order = await self.catalog.create_order(self.items, token=token)
        except CatalogError as err:
            self.error = f"Failed to place order: {err}"
            log.error(f"Error al enviar la orden ({self.session_id}): {err}")
            self._record(self.items, "failed", str(err))
            raise OrderSubmissionError(self.error) from err

        placed, self.items = self.items, []
        self.service.clear()
        self.error = None
        self._record(placed, "placed", order.get("id"))
        log.info(f"Orden {order.get('id')} creada ({self.session_id})")
        return order
