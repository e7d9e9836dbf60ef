"""Defensive numeric parsing for loosely-typed backend payloads"""

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """
    Coerce a backend value to Decimal, falling back to ``default``.

    Amounts arrive as numbers or as numeric strings ("150000.00"). None,
    booleans, unparseable strings, NaN and infinities all map to the default;
    this function never raises.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return default
    else:
        return default

    if not result.is_finite():
        return default
    return result


def to_int(value: Any, default: int = 0) -> int:
    """Coerce to int through to_decimal, truncating any fraction"""
    return int(to_decimal(value, Decimal(default)))
