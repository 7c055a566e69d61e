from __future__ import annotations

import math

from cafe_receipt.models import LineItem
from cafe_receipt.normalize import item_name, item_price, item_quantity, normalize_item


def test_missing_fields_fall_back_to_defaults():
    item = normalize_item(LineItem())
    assert item.name == "Item"
    assert item.quantity == 1
    assert item.unit_price == 0
    assert item.line_total == 0


def test_none_item_does_not_raise():
    item = normalize_item(None)
    assert (item.name, item.quantity, item.unit_price) == ("Item", 1, 0)


def test_non_positive_or_non_numeric_quantity_becomes_one():
    for quantity in (0, -3, "abc", "2", None, math.nan, True):
        assert item_quantity(LineItem(quantity=quantity)) == 1


def test_text_quantity_and_negative_price_boundary():
    # Only NaN and non-numbers are rejected for price; negatives pass through.
    item = normalize_item(LineItem(quantity="abc", price=-5))
    assert item.quantity == 1
    assert item.unit_price == -5
    assert item.line_total == -5


def test_nan_or_text_price_becomes_zero():
    assert item_price(LineItem(price=math.nan)) == 0
    assert item_price(LineItem(price="350")) == 0
    assert item_price(LineItem(price=12.5)) == 12.5


def test_empty_name_uses_placeholder():
    assert item_name(LineItem(product_name="")) == "Item"
    assert item_name(LineItem(product_name="Samosa")) == "Samosa"


def test_line_total_is_price_times_quantity():
    item = normalize_item(LineItem(product_name="Karak Chai", quantity=3, price=120.5))
    assert item.line_total == 361.5


def test_mapping_items_are_accepted():
    item = normalize_item({"productName": "Paratha", "quantity": 2, "price": 80, "notes": "extra butter"})
    assert item.name == "Paratha"
    assert item.line_total == 160
    assert item.notes == "extra butter"


def test_objects_without_item_fields_are_tolerated():
    item = normalize_item(object())
    assert (item.name, item.quantity, item.unit_price, item.variant, item.notes) == ("Item", 1, 0, "", "")
