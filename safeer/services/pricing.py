"""
Price normalization.

Product prices arrive from the catalog in many shapes: plain numbers,
"1200 ج", "١٢٠٠ جنيه", "1,234.50 EGP". normalize_price() turns any of them
into a display string (the trimmed original) and a Decimal used for cart
arithmetic. Parsing is lenient: anything unparseable counts as 0.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from safeer.errors import PriceParseError
from safeer.services.money import to_decimal

# Arabic-Indic (U+0660..U+0669) and Extended Arabic-Indic (U+06F0..U+06F9)
_DIGIT_TRANSLATION = str.maketrans(
    {
        **{chr(0x0660 + i): str(i) for i in range(10)},
        **{chr(0x06F0 + i): str(i) for i in range(10)},
        "٫": ".",  # Arabic decimal separator
        "٬": ",",  # Arabic thousands separator
    }
)

_NUMBER_RUN = re.compile(r"[\d,.]+", re.ASCII)
_NON_NUMERIC = re.compile(r"[^\d.,]", re.ASCII)
# Every "." that has another "." somewhere after it
_NOT_LAST_SEPARATOR = re.compile(r"\.(?=.*\.)")


@dataclass(frozen=True)
class NormalizedPrice:
    display: str
    numeric: Decimal


def to_western_digits(text: str) -> str:
    """Replace Arabic-Indic digit glyphs and separators with ASCII ones."""
    return text.translate(_DIGIT_TRANSLATION)


def _longest_number_run(text: str) -> str | None:
    runs = [run for run in _NUMBER_RUN.findall(text) if any(ch.isdigit() for ch in run)]
    if not runs:
        return None
    return max(runs, key=len)


def _parse_number_text(text: str) -> Decimal | None:
    run = _longest_number_run(to_western_digits(text))
    if run is None:
        return None

    cleaned = _NON_NUMERIC.sub("", run).replace(",", ".")
    cleaned = _NOT_LAST_SEPARATOR.sub("", cleaned).rstrip(".")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def normalize_price(value: Union[str, int, float, Decimal, None], strict: bool = False) -> NormalizedPrice:
    """
    Normalize a catalog price into display text and a numeric value.

    Args:
        value: Price as text in any locale, or a number
        strict: Raise PriceParseError instead of falling back to 0

    Returns:
        NormalizedPrice(display=<trimmed original>, numeric=<Decimal >= 0>)
    """
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        numeric = to_decimal(value)
        if not numeric.is_finite() or numeric < 0:
            if strict:
                raise PriceParseError(f"Invalid price: {value!r}")
            numeric = Decimal("0")
        return NormalizedPrice(display=str(value), numeric=numeric)

    text = "" if value is None else str(value)
    numeric = _parse_number_text(text)
    if numeric is None:
        if strict:
            raise PriceParseError(f"No number found in price: {text!r}")
        numeric = Decimal("0")

    return NormalizedPrice(display=text.strip(), numeric=numeric)
