"""
Money and percentage helpers.

Amounts are ``Decimal`` values quantized to the currency minor unit.
Floats are converted through their string form so ``0.1`` stays ``0.1``.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

MINOR_UNIT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Number) -> Decimal:
    """Round a value to the minor unit using round-half-up."""
    return _to_decimal(value).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def to_percentage(value: Number) -> Decimal:
    """
    Convert a fractional percentage (``0.08`` is 8%) to ``Decimal``.

    Percentages keep their full precision; only money amounts are rounded.
    """
    return _to_decimal(value)
