"""Money and timestamp formatting for printed receipts."""

from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from cafe_receipt.config import DEFAULT_CURRENCY

INVALID_DATE = "Invalid Date"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_FRACTION_STEP = Decimal("0.001")


def format_number(value: Any) -> str:
    """Group a number en-US style with up to three fraction digits, no padding."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return "NaN"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
    try:
        with localcontext() as ctx:
            ctx.prec = 80
            rounded = Decimal(repr(value) if isinstance(value, float) else value).quantize(
                _FRACTION_STEP, rounding=ROUND_HALF_UP
            )
            text = f"{rounded:,f}"
    except InvalidOperation:
        return str(value)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def format_price(price: Any, currency: str = DEFAULT_CURRENCY) -> str:
    return f"{currency} {format_number(price)}"


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Numeric timestamps are epoch milliseconds.
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = f"{raw[:-1]}+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def format_datetime(value: Any) -> str:
    """Render ``Jan 5, 2024, 02:30 PM`` in local time, or ``Invalid Date``."""
    parsed = _parse_timestamp(value)
    if parsed is None:
        return INVALID_DATE
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone()
        except (OverflowError, OSError, ValueError):
            return INVALID_DATE
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{_MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}, {hour:02d}:{parsed.minute:02d} {meridiem}"
