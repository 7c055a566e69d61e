"""Load orders and merchant settings from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cafe_receipt.models import Order, Settings, order_from_dict, settings_from_dict


def _read_object(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def load_order(path: str | Path) -> Order:
    return order_from_dict(_read_object(Path(path)))


def load_settings(path: str | Path | None) -> Settings | None:
    """Settings are optional; a missing path means merchant defaults."""
    if path is None:
        return None
    return settings_from_dict(_read_object(Path(path)))
