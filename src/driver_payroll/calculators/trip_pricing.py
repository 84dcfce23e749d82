"""Trip amount pricing by rate type."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from driver_payroll.calculators.types import RateType

Number = Union[Decimal, int, float, str]

CENTS = Decimal("0.01")

# Synthetic trip value per mile used as the base for percentage pricing.
PERCENTAGE_BASE_PER_MILE = Decimal("2")


def to_decimal(value: Number | None) -> Decimal | None:
    """Coerce a numeric value to Decimal without binary float noise."""
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents), half up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_trip_amount(
    distance: Number,
    rate: Number,
    rate_type: str,
    hours_worked: Number | None = None,
) -> Decimal:
    """Price a trip from its distance, rate and rate type.

    - per_mile: distance * rate
    - percentage: rate percent of a base value of distance * 2
    - hourly: hours_worked * rate, or 0 when hours are missing or zero
    - fixed: the rate itself, unrounded
    - anything else: 0

    Results other than ``fixed`` are rounded to cents.
    """
    distance_d = to_decimal(distance)
    rate_d = to_decimal(rate)
    hours_d = to_decimal(hours_worked)

    if rate_type == RateType.PER_MILE:
        return round_to_cents(distance_d * rate_d)

    if rate_type == RateType.PERCENTAGE:
        base_value = distance_d * PERCENTAGE_BASE_PER_MILE
        return round_to_cents(base_value * (rate_d / 100))

    if rate_type == RateType.HOURLY and hours_d:
        return round_to_cents(hours_d * rate_d)

    if rate_type == RateType.FIXED:
        return rate_d

    return Decimal("0")
