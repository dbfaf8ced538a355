"""Lenient field readers for records coming out of the record store."""

from __future__ import annotations

import enum
import math
from decimal import Decimal, InvalidOperation
from typing import Any


def status_value(status: Any) -> str:
    """Return the lower-case string form of an enum or raw status."""
    if isinstance(status, enum.Enum):
        status = status.value
    if status is None:
        return ""
    return str(status).strip().lower()


def parse_amount(value: Any) -> Decimal | None:
    """Return ``value`` as a finite, non-negative Decimal, or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = repr(value)
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount
