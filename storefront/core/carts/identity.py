from typing import Dict, Mapping, Optional
from storefront.core.carts.models import Product

SEPARATOR = "-"


def _escape(text) -> str:
    # Separadores dentro de nombres/valores se escapan para no colisionar.
    return str(text).replace("\\", "\\\\").replace(SEPARATOR, "\\" + SEPARATOR).replace(":", "\\:")


def identity_of(product_id, selected_attributes: Optional[Mapping[str, str]]) -> str:
    """Clave estable producto + atributos, independiente del orden de selección."""
    entries = sorted((selected_attributes or {}).items(), key=lambda kv: str(kv[0]))
    rendered = SEPARATOR.join(f"{_escape(name)}:{_escape(value)}" for name, value in entries)
    return f"{product_id}{SEPARATOR}{rendered}"


def default_selection(product: Product) -> Dict[str, str]:
    # Primera opción de cada grupo; grupos sin opciones se omiten.
    return {group.name: group.items[0].value for group in product.attributes if group.items}


def is_valid_selection(product: Product, selection: Mapping[str, str]) -> bool:
    """Solo grupos del producto y valores que existen en cada grupo; puede ser parcial."""
    options = {group.name: {opt.value for opt in group.items} for group in product.attributes}
    for name, value in selection.items():
        if name not in options or not isinstance(value, str) or value not in options[name]:
            return False
    return True


def is_complete_selection(product: Product, selection: Mapping[str, str]) -> bool:
    if not is_valid_selection(product, selection):
        return False
    return all(group.name in selection for group in product.attributes)


def toggle_selection(selection: Mapping[str, str], name: str, value: str) -> Dict[str, str]:
    """Marcar el valor ya elegido lo deselecciona."""
    updated = dict(selection)
    if updated.get(name) == value:
        updated.pop(name)
    else:
        updated[name] = value
    return updated
