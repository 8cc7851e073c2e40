# storefront/dependencies.py
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from storefront.config import DEFAULT_SESSION, REDIS_URL
from storefront.core.carts.service import CartService, open_storage
from storefront.core.carts.store import CartStore
from storefront.core.catalog import CatalogClient


@lru_cache()
def get_storage():
    """Backend clave-valor compartido por todo el proceso (Redis o memoria)."""
    return open_storage(REDIS_URL)


@lru_cache()
def get_catalog_client() -> CatalogClient:
    return CatalogClient()


def get_session_id(x_session_id: Optional[str] = Header(None)) -> str:
    return x_session_id or DEFAULT_SESSION


# === DEPENDENCIA PARA FASTAPI ===
def get_cart_service(
    session_id: str = Depends(get_session_id),
    storage=Depends(get_storage),
) -> CartService:
    """Un servicio por request, ligado al espacio de nombres del visitante."""
    return CartService(CartStore(storage.scoped(session_id)))
