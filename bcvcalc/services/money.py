"""Money / rounding helpers.

Centralized so the conversion engine, the rate provider and the display layer
use identical parsing and rounding semantics.
"""

from __future__ import annotations
import re
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

CENT = Decimal("0.01")
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")

Number = Union[Decimal, int, float, str]


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """Parse user-typed text as a plain dot-decimal; None when not a number."""
    if text is None:
        return None
    candidate = text.strip()
    if not _DECIMAL_RE.match(candidate):
        return None
    try:
        return Decimal(candidate)
    except InvalidOperation:
        return None


def _cents(value: Number) -> Decimal:
    amount = Decimal(str(value))
    # Enough precision for every integer digit plus two decimals
    ctx = Context(prec=max(28, amount.adjusted() + 4))
    cents = amount.quantize(CENT, rounding=ROUND_HALF_UP, context=ctx)
    # -0.004 rounds to -0.00
    return cents.copy_abs() if cents.is_zero() else cents


def format2(value: Number) -> str:
    """Two fraction digits, '.' as decimal point, no grouping, half-up."""
    return format(_cents(value), "f")


def format_display(value: Number) -> str:
    """es-VE presentation: '.' groups thousands, ',' separates decimals."""
    text = format(_cents(value), ",f")
    return text.replace(",", "_").replace(".", ",").replace("_", ".")
