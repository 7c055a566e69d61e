from __future__ import annotations

import math
from datetime import datetime, timezone

from cafe_receipt.formatting import INVALID_DATE, format_datetime, format_number, format_price


def test_price_uses_currency_and_grouping():
    assert format_price(700) == "Rs. 700"
    assert format_price(1234567, "PKR") == "PKR 1,234,567"
    assert format_price(1234.5, "$") == "$ 1,234.5"


def test_number_keeps_at_most_three_fraction_digits():
    assert format_number(700.0) == "700"
    assert format_number(0.1 + 0.2) == "0.3"
    assert format_number(2.0005) == "2.001"
    assert format_number(-5) == "-5"


def test_number_special_values():
    assert format_number(math.nan) == "NaN"
    assert format_number(math.inf) == "∞"
    assert format_number(None) == "NaN"


def test_datetime_naive_timestamp_is_local_wall_time():
    assert format_datetime("2024-01-05T14:30:00") == "Jan 5, 2024, 02:30 PM"
    assert format_datetime("2023-11-20T09:05:00") == "Nov 20, 2023, 09:05 AM"
    assert format_datetime("2024-03-01T00:15:00") == "Mar 1, 2024, 12:15 AM"


def test_datetime_accepts_zulu_and_datetime_objects():
    assert format_datetime("2024-01-05T14:30:00Z") != INVALID_DATE
    assert format_datetime(datetime(2024, 6, 9, 18, 0)) == "Jun 9, 2024, 06:00 PM"
    aware = datetime(2024, 6, 9, 18, 0, tzinfo=timezone.utc)
    assert format_datetime(aware).endswith(("AM", "PM"))


def test_invalid_timestamps_degrade_without_raising():
    for value in ("not a date", "", None, {"at": "noon"}):
        assert format_datetime(value) == INVALID_DATE
