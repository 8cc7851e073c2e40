from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional
import logging

log = logging.getLogger(__name__)


def _to_decimal(value) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as err:
        raise ValueError(f"Monto inválido: {value!r}") from err


@dataclass
class Money:
    amount: Decimal
    currency_symbol: str = "$"
    currency_label: Optional[str] = None

    def __post_init__(self):
        self.amount = _to_decimal(self.amount)

    def to_dict(self) -> dict:
        return {
            "amount": str(self.amount),
            "currency": {"symbol": self.currency_symbol, "label": self.currency_label},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Money":
        # Acepta la forma del catálogo ({currency: {symbol}}) y la plana.
        currency = data.get("currency") or {}
        return cls(
            amount=data["amount"],
            currency_symbol=currency.get("symbol", data.get("currency_symbol", "$")),
            currency_label=currency.get("label"),
        )


@dataclass
class AttributeOption:
    value: str
    display_value: str = ""

    def to_dict(self) -> dict:
        return {"value": self.value, "displayValue": self.display_value}

    @classmethod
    def from_dict(cls, data: dict) -> "AttributeOption":
        return cls(value=str(data["value"]), display_value=str(data.get("displayValue", data["value"])))


@dataclass
class AttributeGroup:
    name: str
    items: List[AttributeOption] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "items": [i.to_dict() for i in self.items]}

    @classmethod
    def from_dict(cls, data: dict) -> "AttributeGroup":
        return cls(
            name=data["name"],
            items=[AttributeOption.from_dict(i) for i in data.get("items") or []],
        )


@dataclass
class Category:
    name: str

    def to_dict(self) -> dict:
        return {"name": self.name}


@dataclass
class Product:
    """Proyección de producto entregada por el catálogo. Solo lectura para el carrito."""

    id: str
    name: str
    price: Money
    gallery: List[str] = field(default_factory=list)
    brand: str = ""
    in_stock: bool = True
    category: Optional[Category] = None
    attributes: List[AttributeGroup] = field(default_factory=list)
    description: str = ""

    def __post_init__(self):
        names = [a.name for a in self.attributes]
        if len(names) != len(set(names)):
            raise ValueError(f"Atributos duplicados en el producto {self.id}")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "inStock": self.in_stock,
            "gallery": list(self.gallery),
            "price": self.price.to_dict(),
            "category": self.category.to_dict() if self.category else None,
            "attributes": [a.to_dict() for a in self.attributes],
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        category = data.get("category")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            price=Money.from_dict(data["price"]),
            gallery=list(data.get("gallery") or []),
            brand=data.get("brand") or "",
            in_stock=bool(data.get("inStock", True)),
            category=Category(name=category["name"]) if category else None,
            attributes=[AttributeGroup.from_dict(a) for a in data.get("attributes") or []],
            description=data.get("description") or "",
        )


@dataclass
class CartLine:
    identity_key: str
    product_id: str
    name: str
    price: Money
    quantity: int = 1
    image: Optional[str] = None
    selected_attributes: Dict[str, str] = field(default_factory=dict)
    all_attributes: List[AttributeGroup] = field(default_factory=list)

    def __post_init__(self):
        if not self.identity_key or not isinstance(self.identity_key, str):
            raise ValueError("identity_key inválido")
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("Cantidad debe ser >= 1")

    def line_total(self) -> Decimal:
        return self.price.amount * self.quantity

    def to_dict(self) -> dict:
        return {
            "identity_key": self.identity_key,
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price.to_dict(),
            "quantity": self.quantity,
            "image": self.image,
            "selected_attributes": dict(self.selected_attributes),
            "all_attributes": [a.to_dict() for a in self.all_attributes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        return cls(
            identity_key=data["identity_key"],
            product_id=str(data["product_id"]),
            name=data["name"],
            price=Money.from_dict(data["price"]),
            quantity=data["quantity"],
            image=data.get("image"),
            selected_attributes={str(k): str(v) for k, v in (data.get("selected_attributes") or {}).items()},
            all_attributes=[AttributeGroup.from_dict(a) for a in data.get("all_attributes") or []],
        )
