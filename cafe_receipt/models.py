"""Domain models for cafe receipts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class LineItem:
    """A purchased product as received from the order system, fields unchecked."""

    product_name: Any = None
    quantity: Any = None
    price: Any = None
    variant: Any = None
    notes: Any = None


@dataclass(frozen=True)
class NormalizedItem:
    """A line item with every display field resolved."""

    name: str
    quantity: float
    unit_price: float
    variant: str = ""
    notes: str = ""

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Payment:
    method: Any = None
    amount: Any = None
    tip: Any = None


@dataclass(frozen=True)
class Order:
    """A completed point-of-sale order snapshot."""

    order_number: Any = ""
    created_at: Any = None
    type: Any = ""
    table_name: Any = None
    cashier_name: Any = None
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    payments: tuple[Payment, ...] = field(default_factory=tuple)
    subtotal: Any = 0
    tax_amount: Any = 0
    total: Any = 0


@dataclass(frozen=True)
class Settings:
    """Merchant configuration printed on each receipt."""

    cafe_name: Any = None
    cafe_address: Any = None
    cafe_phone: Any = None
    tax_percentage: Any = None
    receipt_footer: Any = None
    currency: Any = None


def _pick(data: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _sequence(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def line_item_from_dict(data: Any) -> LineItem:
    if not isinstance(data, Mapping):
        return LineItem()
    return LineItem(
        product_name=_pick(data, "productName", "product_name"),
        quantity=data.get("quantity"),
        price=data.get("price"),
        variant=data.get("variant"),
        notes=data.get("notes"),
    )


def payment_from_dict(data: Any) -> Payment:
    if not isinstance(data, Mapping):
        return Payment()
    return Payment(method=data.get("method"), amount=data.get("amount"), tip=data.get("tip"))


def order_from_dict(data: Mapping[str, Any]) -> Order:
    """Build an order from a camelCase (or snake_case) JSON mapping."""
    return Order(
        order_number=_pick(data, "orderNumber", "order_number", ""),
        created_at=_pick(data, "createdAt", "created_at"),
        type=data.get("type", ""),
        table_name=_pick(data, "tableName", "table_name"),
        cashier_name=_pick(data, "cashierName", "cashier_name"),
        items=tuple(line_item_from_dict(item) for item in _sequence(data.get("items"))),
        payments=tuple(payment_from_dict(payment) for payment in _sequence(data.get("payments"))),
        subtotal=data.get("subtotal", 0),
        tax_amount=_pick(data, "taxAmount", "tax_amount", 0),
        total=data.get("total", 0),
    )


def settings_from_dict(data: Mapping[str, Any] | None) -> Settings | None:
    """Build merchant settings; ``None`` stays ``None`` so defaults apply."""
    if data is None:
        return None
    return Settings(
        cafe_name=_pick(data, "cafeName", "cafe_name"),
        cafe_address=_pick(data, "cafeAddress", "cafe_address"),
        cafe_phone=_pick(data, "cafePhone", "cafe_phone"),
        tax_percentage=_pick(data, "taxPercentage", "tax_percentage"),
        receipt_footer=_pick(data, "receiptFooter", "receipt_footer"),
        currency=data.get("currency"),
    )
