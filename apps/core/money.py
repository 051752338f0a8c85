# apps/core/money.py
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')


def to_decimal(value):
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(amount):
    """Round a Decimal amount to currency precision."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
