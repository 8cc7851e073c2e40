from decimal import Decimal
from typing import List

from storefront.core.carts.models import CartLine


def total_price(cart: List[CartLine]) -> Decimal:
    return sum((line.line_total() for line in cart), Decimal("0"))


def items_count(cart: List[CartLine]) -> int:
    return sum(line.quantity for line in cart)


def items_label(count: int) -> str:
    return "1 Item" if count == 1 else f"{count} Items"


def format_price(amount: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{amount.quantize(Decimal('0.01')):,}"


def cart_summary(cart: List[CartLine]) -> dict:
    """
    Resumen del carrito para la capa de vista.
    {
      "items": [...],
      "items_count": int,
      "items_label": str,
      "total": str,
      "total_formatted": str
    }
    """
    count = items_count(cart)
    total = total_price(cart)
    # Todas las líneas comparten moneda; sin conversión.
    symbol = cart[0].price.currency_symbol if cart else "$"
    return {
        "items": [line.to_dict() for line in cart],
        "items_count": count,
        "items_label": items_label(count),
        "total": str(total),
        "total_formatted": format_price(total, symbol),
    }
