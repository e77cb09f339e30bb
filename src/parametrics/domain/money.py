"""Money helpers.

All monetary values handled by the engine are USD amounts held as
``Decimal`` and quantized to two places with half-up rounding.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    """Convert a number-like value to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value))


def round_money(value: Any) -> Decimal:
    """Round a value to cents using ROUND_HALF_UP.

    >>> round_money(2.675)
    Decimal('2.68')
    """
    return to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Coerce loose input to a finite float, returning ``fallback`` otherwise."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return fallback
    if not math.isfinite(number):
        return fallback
    return number
