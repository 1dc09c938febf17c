"""Helpers for monetary amounts."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from components.core.exceptions import ValidationError

CENTS = Decimal("0.01")
# Amount columns are Numeric(12, 2)
MAX_AMOUNT = Decimal("1e10")


def to_amount(value: Any, field: str = "value") -> Decimal:
    """
    Convert a number to a Decimal rounded to cents.

    Rejects NaN, infinities and anything that does not fit the amount columns.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if not amount.is_finite():
            raise ValidationError(f"{field} must be a finite number")
        if abs(amount) >= MAX_AMOUNT:
            raise ValidationError(f"{field} is out of range")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
