"""Pricing rules for stays and coupon discounts."""

from decimal import ROUND_HALF_UP, Decimal

from staybook.domain.value_objects import StayPeriod

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_money(amount: Decimal) -> Decimal:
    """Quantize an amount to cents."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def stay_total(price_per_night: Decimal, period: StayPeriod) -> Decimal:
    """Total price of a stay: nightly price times the number of nights."""
    return to_money(price_per_night * period.nights)


def discounted_amount(
    amount: Decimal,
    *,
    percentage: Decimal | None = None,
    fixed: Decimal | None = None,
) -> Decimal:
    """Apply a percentage and/or a fixed discount to ``amount``.

    The percentage is applied first, then the fixed amount is subtracted.
    The result never drops below zero.

    Args:
        amount: The undiscounted amount.
        percentage: Percentage off (e.g. ``Decimal("15")`` for 15%), or None.
        fixed: Fixed amount off, or None.

    Returns:
        The discounted amount, quantized to cents.
    """
    result = amount
    if percentage is not None:
        result = result * (1 - percentage / HUNDRED)
    if fixed is not None:
        result = result - fixed
    return to_money(max(ZERO, result))
