# storefront/routers/catalog.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.core.catalog import CatalogClient, CatalogError
from storefront.dependencies import get_catalog_client

router = APIRouter(tags=["Catalog"])


@router.get("/categories")
async def list_categories(catalog: CatalogClient = Depends(get_catalog_client)):
    try:
        data = await catalog.get_initial_data()
    except CatalogError as err:
        raise HTTPException(status_code=502, detail=str(err))
    return [c.to_dict() for c in data["categories"]]


@router.get("/products")
async def list_products(
    category: str | None = None,
    catalog: CatalogClient = Depends(get_catalog_client),
):
    """
    Lista productos del catálogo.
    - Si envías category, filtra por nombre de categoría ("all" devuelve todo).
    """
    try:
        data = await catalog.get_initial_data()
    except CatalogError as err:
        raise HTTPException(status_code=502, detail=str(err))

    products = data["products"]
    if category and category != "all":
        products = [p for p in products if p.category and p.category.name == category]
    return [p.to_dict() for p in products]


@router.get("/products/{product_id}")
async def get_product(product_id: str, catalog: CatalogClient = Depends(get_catalog_client)):
    try:
        product = await catalog.get_product(product_id)
    except CatalogError as err:
        raise HTTPException(status_code=502, detail=str(err))
    if not product:
        raise HTTPException(status_code=404, detail="Producto no encontrado.")
    return product.to_dict()
