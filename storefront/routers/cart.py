# storefront/routers/cart.py
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, StrictInt

from storefront.core.carts.badge import BadgeObserver
from storefront.core.carts.identity import is_complete_selection
from storefront.core.carts.models import Product
from storefront.core.carts.service import (
    CartLineNotFound,
    CartService,
    InvalidProductError,
    InvalidSelectionError,
)
from storefront.core.catalog import CatalogClient, CatalogError
from storefront.core.pricing import cart_summary
from storefront.dependencies import get_cart_service, get_catalog_client

router = APIRouter(prefix="/cart", tags=["Cart"])


class AddItemRequest(BaseModel):
    product_id: str
    selected_attributes: Dict[str, str] = {}


class QuickAddRequest(BaseModel):
    product_id: str


class ChangeQuantityRequest(BaseModel):
    delta: StrictInt


async def _fetch_in_stock(catalog: CatalogClient, product_id) -> Product:
    if not product_id:
        raise HTTPException(status_code=400, detail="Falta product_id.")
    try:
        product = await catalog.get_product(str(product_id))
    except CatalogError as err:
        raise HTTPException(status_code=502, detail=str(err))
    if not product:
        raise HTTPException(status_code=404, detail="Producto no encontrado.")
    if not product.in_stock:
        raise HTTPException(status_code=400, detail="Producto sin stock.")
    return product


@router.get("")
def show_cart(service: CartService = Depends(get_cart_service)):
    return cart_summary(service.read())


@router.get("/badge")
def badge(service: CartService = Depends(get_cart_service)):
    """Contador del encabezado: suma de cantidades, sin etiqueta si es 0."""
    observer = BadgeObserver(service)
    count = observer.refresh()
    return {"count": count, "label": observer.label}


@router.post("/items")
async def add_item(
    payload: AddItemRequest,
    service: CartService = Depends(get_cart_service),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    """
    Agrega un producto con los atributos elegidos.
    Requiere stock y una selección completa (un valor por grupo).
    """
    product = await _fetch_in_stock(catalog, payload.product_id)
    selection = payload.selected_attributes
    if not is_complete_selection(product, selection):
        raise HTTPException(status_code=400, detail="Selecciona todas las opciones del producto.")

    try:
        cart = service.add(product, selection)
    except (InvalidProductError, InvalidSelectionError) as err:
        raise HTTPException(status_code=400, detail=str(err))
    return cart_summary(cart)


@router.post("/quick-add")
async def quick_add(
    payload: QuickAddRequest,
    service: CartService = Depends(get_cart_service),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    product = await _fetch_in_stock(catalog, payload.product_id)
    try:
        cart = service.quick_add(product)
    except InvalidProductError as err:
        raise HTTPException(status_code=400, detail=str(err))
    return cart_summary(cart)


@router.patch("/items/{identity_key:path}")
def change_quantity(
    identity_key: str,
    payload: ChangeQuantityRequest,
    service: CartService = Depends(get_cart_service),
):
    try:
        cart = service.change_quantity(identity_key, payload.delta)
    except CartLineNotFound as err:
        raise HTTPException(status_code=404, detail=str(err))
    return cart_summary(cart)


@router.delete("")
def clear_cart(service: CartService = Depends(get_cart_service)):
    service.clear()
    return cart_summary([])
