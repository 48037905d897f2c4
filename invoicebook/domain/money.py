"""Money helpers

Every stored or displayed amount goes through ``round2`` at the point of
computation. User-entered numbers go through ``parse_amount``, which never
fails: malformed input degrades to zero.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Annotated

from pydantic import BeforeValidator

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Leading numeric prefix, so "12abc" reads as 12 and "abc" as 0
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a user-entered number, treating anything unreadable as zero

    Args:
        raw: str, int, float, Decimal or None

    Returns:
        Decimal value, ``Decimal("0")`` for empty, non-numeric or non-finite input
    """
    if raw is None or isinstance(raw, bool):
        return ZERO

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(repr(raw))
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if not match:
            return ZERO
        try:
            value = Decimal(match.group(0).strip())
        except InvalidOperation:
            return ZERO

    if not value.is_finite():
        return ZERO
    return value


def round2(value: Any) -> Decimal:
    """Round half away from zero to 2 fraction digits"""
    return parse_amount(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Any, currency_symbol: str) -> str:
    """Currency symbol followed by the amount fixed to 2 decimals, no grouping"""
    return f"{currency_symbol}{round2(parse_amount(amount)):.2f}"


def plain_number(value: Any) -> str:
    """Render a number without trailing zeros: 1000.00 -> "1000", 295.10 -> "295.1" """
    return format(parse_amount(value).normalize(), "f")


# Model field types: raw input is coerced, never rejected
Money = Annotated[Decimal, BeforeValidator(round2)]
Amount = Annotated[Decimal, BeforeValidator(parse_amount)]
