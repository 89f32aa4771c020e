"""Utility helpers for parsing monetary input and formatting cents."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

_CURRENCY_SYMBOLS = "$€£¥₽₩₹₺"
_CENT = Decimal("0.01")
# Values this large cannot be quantized to cents in the default context
_MAX_INTEGER_DIGITS = 24


def normalise_plain_number(text: Optional[str]) -> Optional[str]:
    """Return a plain numeric string for formatted monetary input.

    Users type values such as ``"1,234.50"`` or ``"$1 234,50"`` into the
    amount box.  ``Decimal`` cannot parse those directly because of the
    thousands separators, currency symbols, or locale specific decimal
    separators, so they are stripped here.
    """

    if not text:
        return None

    cleaned = text.strip()
    if not cleaned:
        return None

    negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1].strip()

    while cleaned and cleaned[0] in _CURRENCY_SYMBOLS:
        cleaned = cleaned[1:].lstrip()
    while cleaned and cleaned[-1] in _CURRENCY_SYMBOLS:
        cleaned = cleaned[:-1].rstrip()

    if not cleaned:
        return None

    cleaned = cleaned.replace("\u00a0", " ")

    decimal_is_comma = False
    if "," in cleaned and "." in cleaned:
        decimal_is_comma = cleaned.rfind(".") < cleaned.rfind(",")
    elif "," in cleaned:
        fractional_length = len(cleaned) - cleaned.rfind(",") - 1
        decimal_is_comma = 0 < fractional_length <= 2

    cleaned = cleaned.replace("_", "").replace(" ", "")
    if decimal_is_comma:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")

    if not cleaned:
        return None
    if negative:
        cleaned = f"-{cleaned}"
    return cleaned


def coerce_amount(raw_value: Any) -> Optional[Decimal]:
    """Convert user-provided input to a :class:`Decimal` rounded to cents.

    ``None`` is returned when the value is empty, cannot be parsed, is not
    finite, or is too large to hold cents precision.
    """

    if raw_value is None:
        return None

    if isinstance(raw_value, Decimal):
        value = raw_value
    elif isinstance(raw_value, (int, float)):
        try:
            value = Decimal(str(raw_value))
        except InvalidOperation:
            return None
    else:
        text = normalise_plain_number(str(raw_value))
        if text is None:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None

    if not value.is_finite() or value.adjusted() > _MAX_INTEGER_DIGITS:
        return None
    try:
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


def to_cents(amount: Decimal) -> int:
    """Return ``amount`` as an integer count of cents."""

    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_cents(cents: Optional[int], symbol: str = "$") -> str:
    """Render an integer cent value as a currency string."""

    if cents is None:
        return ""
    value = Decimal(cents) / 100
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
