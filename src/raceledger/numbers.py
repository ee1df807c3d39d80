"""Lenient numeric parsing for user-entered odds and amounts."""

from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any, default: float | None = None) -> float | None:
    """Return value as a finite float, or default when it is blank, non-numeric or non-finite."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # int too large for a float
            return default
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def format_amount(value: float) -> str:
    """Two-decimal string used for stored payouts."""
    return f"{value:.2f}"
