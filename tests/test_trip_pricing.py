"""Tests for trip pricing by rate type."""

from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from driver_payroll.calculators.trip_pricing import (
    calculate_trip_amount,
    round_to_cents,
    to_decimal,
)
from driver_payroll.calculators.types import RateType


class TestRoundToCents:
    """Test half-up rounding to cents."""

    def test_half_up(self):
        """Half cents round away from zero."""
        assert round_to_cents(Decimal("10.125")) == Decimal("10.13")
        assert round_to_cents(Decimal("10.124")) == Decimal("10.12")
        assert round_to_cents(Decimal("-147.3625")) == Decimal("-147.36")
        assert round_to_cents(Decimal("83.3625")) == Decimal("83.36")

    def test_float_coercion_avoids_binary_noise(self):
        """Floats convert through their shortest repr."""
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(None) is None
        assert to_decimal("2.50") == Decimal("2.50")


class TestCalculateTripAmount:
    """Test pricing for each rate type."""

    def test_per_mile(self):
        """per_mile: distance * rate."""
        assert calculate_trip_amount(Decimal("250"), Decimal("1.50"), "per_mile") == Decimal(
            "375.00"
        )

    def test_per_mile_rounds_to_cents(self):
        """per_mile results are rounded half up."""
        assert calculate_trip_amount(Decimal("123.45"), Decimal("0.555"), "per_mile") == Decimal(
            "68.51"
        )

    def test_percentage(self):
        """percentage: rate percent of distance * 2."""
        assert calculate_trip_amount(Decimal("300"), Decimal("30"), "percentage") == Decimal(
            "180.00"
        )

    def test_percentage_rounding(self):
        """100 miles at 12.345% of a 200.00 base is 24.69."""
        assert calculate_trip_amount(
            Decimal("100"), Decimal("12.345"), "percentage"
        ) == Decimal("24.69")

    def test_hourly(self):
        """hourly: hours * rate."""
        assert calculate_trip_amount(
            Decimal("80"), Decimal("22.50"), "hourly", Decimal("7.5")
        ) == Decimal("168.75")

    @pytest.mark.parametrize("hours", [None, Decimal("0"), 0])
    def test_hourly_without_hours_is_zero(self, hours):
        """hourly trips without hours (or with zero hours) earn nothing."""
        assert calculate_trip_amount(Decimal("80"), Decimal("22.50"), "hourly", hours) == 0

    def test_fixed_returns_rate_unrounded(self):
        """fixed: the rate itself, with no rounding applied."""
        amount = calculate_trip_amount(Decimal("500"), Decimal("450.125"), "fixed")
        assert amount == Decimal("450.125")

    def test_unknown_rate_type_is_zero(self):
        """Unrecognized rate types price to zero."""
        assert calculate_trip_amount(Decimal("100"), Decimal("2"), "per_load") == 0

    def test_accepts_enum_and_plain_numbers(self):
        """Enum members and plain ints/floats are accepted."""
        assert calculate_trip_amount(100, 0.55, RateType.PER_MILE) == Decimal("55.00")

    @pytest.mark.parametrize(
        "distance, rate, rate_type, hours, expected",
        [
            ("380", "0.65", "per_mile", None, "247.00"),
            ("100", "50", "percentage", None, "100.00"),
            ("0", "20", "hourly", "8", "160.00"),
            ("120", "20", "hourly", None, "0"),
        ],
    )
    def test_reference_amounts(self, distance, rate, rate_type, hours, expected):
        amount = calculate_trip_amount(
            Decimal(distance), Decimal(rate), rate_type, Decimal(hours) if hours else None
        )
        assert amount == Decimal(expected)

    def test_zero_distance(self):
        """Zero distance yields zero for distance-based rates."""
        assert calculate_trip_amount(Decimal("0"), Decimal("1.50"), "per_mile") == 0
        assert calculate_trip_amount(Decimal("0"), Decimal("30"), "percentage") == 0


class TestPricingProperties:
    """Property-based checks on trip pricing."""

    @given(
        distance=st.decimals(min_value=0, max_value=5000, places=2),
        rate=st.decimals(min_value=0, max_value=100, places=4),
    )
    def test_per_mile_is_at_cents(self, distance, rate):
        """Distance based amounts always carry at most two decimals."""
        amount = calculate_trip_amount(distance, rate, "per_mile")
        assert amount == amount.quantize(Decimal("0.01"))
        assert amount >= 0

    @given(
        distance=st.decimals(min_value=0, max_value=5000, places=2),
        rate=st.decimals(min_value=0, max_value=100, places=2),
    )
    def test_percentage_matches_per_mile_at_double_rate(self, distance, rate):
        """percentage at r% equals per_mile at 2*r/100 per mile."""
        assert calculate_trip_amount(distance, rate, "percentage") == calculate_trip_amount(
            distance, rate * 2 / 100, "per_mile"
        )
