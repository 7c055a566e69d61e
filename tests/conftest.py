from __future__ import annotations

import pytest

from cafe_receipt.models import LineItem, Order, Payment, Settings


@pytest.fixture
def latte_order() -> Order:
    return Order(
        order_number="A-102",
        created_at="2024-01-05T14:30:00",
        type="dine-in",
        items=(LineItem(product_name="Latte", quantity=2, price=350),),
        payments=(Payment(method="cash", amount=700, tip=0),),
        subtotal=700,
        tax_amount=112,
        total=812,
    )


@pytest.fixture
def merchant_settings() -> Settings:
    return Settings(
        cafe_name="Chai Corner",
        cafe_address="12 Mall Road",
        cafe_phone="0300-1234567",
        tax_percentage=5,
        receipt_footer="See you soon",
        currency="PKR",
    )
