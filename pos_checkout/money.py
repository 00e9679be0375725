"""Money helpers.

Amounts are ``decimal.Decimal`` throughout. Anything coming in from callers
goes through ``to_money`` first so floats like ``0.1`` keep their printed
value instead of their binary one.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal(100)


def to_money(value) -> Decimal:
    """Convert int, float, str or Decimal into a Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value) -> Decimal:
    """Round half-up to two decimal places."""
    return to_money(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def round_percent(fraction: Decimal) -> Decimal:
    """Turn a 0..1 fraction into a whole percentage, rounded half-up."""
    return (fraction * HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, percent) -> Decimal:
    return amount * to_money(percent) / HUNDRED


def vat_inclusive(unit_price: Decimal, quantity: int, vat_percent: int) -> Decimal:
    """Unrounded ``unit_price * quantity * (1 + vat/100)``."""
    return unit_price * quantity * (1 + Decimal(vat_percent) / HUNDRED)
