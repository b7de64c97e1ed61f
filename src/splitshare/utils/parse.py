from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Union

from splitshare.models import HUNDRED, ZERO

NumberLike = Union[Decimal, int, float, str, None]

_SPACES = re.compile(r"[\s _']+")
_PLAIN_NUMBER = re.compile(r"[+-]?[0-9.,]+")

# Far below the 28 significant digits of the default Decimal context,
# so cent arithmetic in finalize() stays exact.
MAX_AMOUNT = Decimal("1000000000000")


def to_decimal(value: NumberLike) -> Decimal:
    """Convert anything the UI can hand us into a finite Decimal, 0 on failure."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        result = Decimal(str(value))
    else:
        text = _normalize_number_text(str(value))
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def to_money(value: NumberLike, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    return clamp(to_decimal(value), ZERO, maximum)


def to_signed_money(value: NumberLike, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    return clamp(to_decimal(value), -maximum, maximum)


def to_percentage(value: NumberLike) -> Decimal:
    return clamp(to_decimal(value), ZERO, HUNDRED)


def to_shares(value: NumberLike, minimum: int = 1, maximum: int = 10) -> int:
    number = to_decimal(value)
    return int(clamp(number.to_integral_value(), Decimal(minimum), Decimal(maximum)))


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    return max(lower, min(upper, value))


def parse_amount(text: str | None, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    """
    Parse the amount field as typed by the user.

    Supported inputs:
    - 12.50
    - 12,50 (comma as decimal separator)
    - 1,234.50 / 1.234,50 (thousands separators)
    - 1 234,50
    Exponent forms, other text, negative values and NaN/Infinity give 0.
    Amounts above ``maximum`` are clamped to it.
    """
    if text is None:
        return ZERO
    return to_money(text, maximum)


def _normalize_number_text(text: str) -> str:
    text = _SPACES.sub("", text.strip())
    if not _PLAIN_NUMBER.fullmatch(text):
        return ""

    has_comma = "," in text
    has_dot = "." in text
    if has_comma and has_dot:
        # The separator that comes last is the decimal one
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif has_comma:
        head, _, tail = text.rpartition(",")
        if text.count(",") == 1 and len(tail) != 3:
            text = f"{head}.{tail}"
        else:
            text = text.replace(",", "")
    return text
