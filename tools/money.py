"""
Money helpers shared by the calculators and the ledger
Amounts travel as floats; arithmetic that must be exact is done in Decimal
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from models.errors import ValidationError


CENT = Decimal("0.01")

# Largest single payment or transfer accepted (₹1 lakh crore)
MAX_AMOUNT = Decimal("1e12")


def parse_amount(value, field: str = "amount") -> Decimal:
    """
    Turn user input into a positive Decimal

    Accepts ints, floats, Decimals and numeric strings (form input).
    Raises ValidationError for anything non-numeric, non-finite, <= 0
    or above MAX_AMOUNT.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")

    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number")

    try:
        amount = Decimal(value.strip()) if isinstance(value, str) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}")

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field} must not exceed {MAX_AMOUNT:,.0f}")

    return amount


def quantize(value: Decimal) -> Decimal:
    """Round half-up to the paisa"""
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"amount {value} is too large to round to the paisa")


def to_cents(value) -> int:
    return int(quantize(Decimal(str(value))) * 100)


def from_cents(cents: int) -> float:
    return float(Decimal(cents) / 100)
