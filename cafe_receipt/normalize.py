"""Line-item field normalization.

Order data reaches the printer from several sources and is not trusted: every
accessor here falls back to a safe default instead of raising, so a receipt
can always be produced.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from cafe_receipt.models import NormalizedItem, line_item_from_dict

DEFAULT_ITEM_NAME = "Item"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def item_name(item: Any) -> str:
    name = getattr(item, "product_name", None)
    if name is not None and name != "":
        return str(name)
    return DEFAULT_ITEM_NAME


def item_quantity(item: Any) -> float:
    quantity = getattr(item, "quantity", None)
    if _is_number(quantity) and quantity > 0:
        return quantity
    return 1


def item_price(item: Any) -> float:
    # Negative prices (refund lines, discounts) are kept as-is.
    price = getattr(item, "price", None)
    if _is_number(price):
        return price
    return 0


def normalize_item(item: Any) -> NormalizedItem:
    """Resolve name, quantity and unit price for one raw line item."""
    if isinstance(item, Mapping):
        item = line_item_from_dict(item)
    variant = getattr(item, "variant", None)
    notes = getattr(item, "notes", None)
    return NormalizedItem(
        name=item_name(item),
        quantity=item_quantity(item),
        unit_price=item_price(item),
        variant=str(variant) if variant else "",
        notes=str(notes) if notes else "",
    )
