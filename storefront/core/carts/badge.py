import asyncio
import logging
from typing import Callable, Optional

from storefront.config import BADGE_POLL_INTERVAL
from storefront.core.carts.service import CartService
from storefront.core.pricing import items_count

log = logging.getLogger(__name__)


class BadgeObserver:
    """Contador del carrito por sondeo periódico.

    No hay suscripción: el contador puede quedar desactualizado como mucho
    ``interval`` segundos respecto de lo persistido.
    """

    def __init__(
        self,
        service: CartService,
        interval: float = BADGE_POLL_INTERVAL,
        on_change: Optional[Callable[[int], None]] = None,
    ):
        self.service = service
        self.interval = interval
        self.on_change = on_change
        self.count = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def label(self) -> Optional[str]:
        # Sin insignia cuando el carrito está vacío.
        return str(self.count) if self.count > 0 else None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh(self) -> int:
        count = items_count(self.service.read())
        if count != self.count:
            self.count = count
            if self.on_change:
                self.on_change(count)
        return count

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.refresh()
            except Exception as err:
                log.warning(f"Fallo al refrescar el contador del carrito: {err}")

    async def start(self) -> None:
        if self.running:
            return
        self.refresh()
        self._task = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def __aenter__(self) -> "BadgeObserver":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()
