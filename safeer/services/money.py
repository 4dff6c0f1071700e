"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Cart totals
are computed with these helpers and only turned into strings or floats
at the display / JSON boundary.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from safeer.config import CURRENCY_SUFFIX

Number = Union[str, int, float, Decimal]

# Displayed totals always carry exactly 2 decimal places
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns Decimal("0") for None and for values that cannot be parsed.
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through str() so 0.1 stays 0.1
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round a monetary value half-up to 2 decimal places."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_amount(value: Number) -> str:
    """
    Fixed 2-decimal string without grouping, e.g. "4000.00".

    This is the representation used by cart totals and order messages.
    """
    return f"{round_money(value):.2f}"


def format_money(value: Number, suffix: str = CURRENCY_SUFFIX) -> str:
    """Amount with the store currency suffix, e.g. "4100.00 ج"."""
    return f"{format_amount(value)} {suffix}"


def to_float(value: Number) -> float:
    """
    Convert to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
