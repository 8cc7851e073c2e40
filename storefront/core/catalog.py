"""
Cliente del servicio de catálogo (GraphQL).

Consulta categorías y productos y envía la orden final. La autenticación se
limita a reenviar un token existente en la llamada de creación de orden.
"""

import logging
from typing import Any, List, Optional

import httpx

from storefront.config import CATALOG_API_URL, CATALOG_TIMEOUT_SECONDS
from storefront.core.carts.models import CartLine, Category, Product

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Error de red, HTTP o GraphQL al hablar con el catálogo."""


GET_CATEGORIES_AND_PRODUCTS = """
query {
  categories { name }
  products {
    id name inStock
    attributes { name items { value displayValue } }
    category { name }
    gallery
    price { amount currency { symbol } }
  }
}
"""

GET_PRODUCT_BY_ID = """
query Product($id: String!) {
  product(id: $id) {
    id name brand inStock description gallery
    category { name }
    attributes { name items { value displayValue } }
    price { amount currency { label symbol } }
  }
}
"""

CREATE_ORDER = """
mutation CreateOrder($products: [OrderProductInput!]!) {
  createOrder(products: $products) {
    id
    orderedProducts {
      product { name }
      quantity
      unitPrice
      total
      selectedAttributes { name value }
    }
    total
    createdAt
  }
}
"""


def order_payload(cart: List[CartLine]) -> List[dict]:
    return [
        {
            "productId": line.product_id,
            "quantity": line.quantity,
            "selectedAttributes": [
                {"name": name, "value": str(value)}
                for name, value in line.selected_attributes.items()
            ],
        }
        for line in cart
    ]


class CatalogClient:
    """
    Cliente GraphQL del catálogo.

    Args:
        api_url: Endpoint GraphQL
        timeout: Tiempo máximo por petición, en segundos
        transport: Transporte httpx alternativo (tests)
    """

    def __init__(
        self,
        api_url: str = CATALOG_API_URL,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Cierra el cliente HTTP"""
        await self._http_client.aclose()

    async def _request(
        self,
        query: str,
        variables: Optional[dict] = None,
        token: Optional[str] = None,
    ) -> dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._http_client.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
                headers=headers,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as err:
            logger.error(f"GraphQL request failed: {err}")
            raise CatalogError(str(err)) from err

        if not isinstance(body, dict):
            logger.error(f"GraphQL response is not an object: {type(body).__name__}")
            raise CatalogError("Respuesta inesperada del catálogo")

        errors = body.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) and errors else None
            message = first.get("message") if isinstance(first, dict) else None
            message = str(message or "GraphQL error")
            logger.error(f"GraphQL error: {message}")
            raise CatalogError(message)

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise CatalogError("Respuesta inesperada del catálogo")
        return data

    # ==================== Catálogo ====================

    async def get_initial_data(self) -> dict:
        """Categorías y productos para la carga inicial"""
        data = await self._request(GET_CATEGORIES_AND_PRODUCTS)
        return {
            "categories": [Category(name=c["name"]) for c in data.get("categories") or []],
            "products": [Product.from_dict(p) for p in data.get("products") or []],
        }

    async def get_product(self, product_id: str) -> Optional[Product]:
        data = await self._request(GET_PRODUCT_BY_ID, {"id": str(product_id)})
        product = data.get("product")
        return Product.from_dict(product) if product else None

    # ==================== Órdenes ====================

    async def create_order(self, cart: List[CartLine], token: Optional[str] = None) -> dict:
        """Envía la orden; requiere el token del visitante si el catálogo lo pide"""
        data = await self._request(
            CREATE_ORDER,
            {"products": order_payload(cart)},
            token=token,
        )
        order = data.get("createOrder") or {}
        if not isinstance(order, dict):
            raise CatalogError("Respuesta inesperada del catálogo")
        return order
