"""Parsing of raw user input into the values the service expects.

Blank input means "no value" and parses to None. Anything that cannot be
coerced raises ValidationError.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from projtrack.database.mapping import HOURS_SCALE
from projtrack.exceptions import ValidationError


def parse_text(raw: str | None) -> str | None:
    """Trim text input; blank input becomes None."""
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def parse_int(raw: str | None) -> int | None:
    """Parse an integer, or None for blank input.

    Raises:
        ValidationError: If the text is not an integer.
    """
    text = parse_text(raw)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError as e:
        raise ValidationError(text) from e


def parse_decimal(raw: str | None) -> Decimal | None:
    """Parse a decimal with two decimal places, or None for blank input.

    "3.5" parses to Decimal("3.50"). Values that would need rounding to fit
    two decimal places are rejected.

    Raises:
        ValidationError: If the text is not a finite number or has more
            than two decimal places.
    """
    text = parse_text(raw)
    if text is None:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise ValidationError(text) from e
    if not value.is_finite():
        raise ValidationError(text)

    try:
        scaled = value.quantize(HOURS_SCALE)
    except InvalidOperation as e:
        raise ValidationError(text, "is too large") from e
    if scaled != value:
        raise ValidationError(text, "has more than two decimal places")
    return scaled
