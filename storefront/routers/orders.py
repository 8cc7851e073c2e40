# storefront/routers/orders.py
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Header, HTTPException

from storefront.core.carts.overlay import OrderSubmissionError, OverlaySession
from storefront.core.carts.service import CartService
from storefront.core.catalog import CatalogClient
from storefront.dependencies import get_cart_service, get_catalog_client, get_session_id

router = APIRouter(prefix="/orders", tags=["Orders"])


def _bearer_token(authorization: Optional[str], token: Optional[str]) -> Optional[str]:
    # Prioridad: cabecera Authorization, luego cookie "token".
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return token or None


@router.post("")
async def place_order(
    session_id: str = Depends(get_session_id),
    service: CartService = Depends(get_cart_service),
    catalog: CatalogClient = Depends(get_catalog_client),
    authorization: Optional[str] = Header(None),
    token: Optional[str] = Cookie(None),
):
    """
    Envía la orden con el contenido actual del carrito.
    Si el catálogo falla, el carrito queda intacto para reintentar.
    """
    overlay = OverlaySession(service, catalog, session_id=session_id)
    overlay.open()
    if not overlay.items:
        raise HTTPException(status_code=400, detail="El carrito está vacío.")

    total = overlay.total_price
    items_label = overlay.items_label
    try:
        order = await overlay.place_order(token=_bearer_token(authorization, token))
    except OrderSubmissionError as err:
        raise HTTPException(status_code=502, detail=str(err))

    return {
        "message": "Orden creada correctamente",
        "order": order,
        "total": str(total),
        "items_label": items_label,
    }
