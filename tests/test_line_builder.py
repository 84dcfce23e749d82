"""Tests for pay statement item builder."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from driver_payroll.calculators.aggregator import PayStatementAggregator
from driver_payroll.calculators.line_builder import StatementItemBuilder
from driver_payroll.calculators.types import ItemType, StatementItemCandidate


def _statement(trips=None, expenses=None, cash_advances=None, deductions=None, **kwargs):
    return PayStatementAggregator.generate(
        company_id=1,
        driver_id=7,
        driver_name="Dana Reyes",
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 15),
        trips=trips,
        expenses=expenses,
        cash_advances=cash_advances,
        deductions=deductions,
        **kwargs,
    )


class TestStatementItemBuilder:
    """Test item creation and signs."""

    def test_create_trip_item(self, sample_trips):
        """Trip items are positive and reference the trip."""
        item = StatementItemBuilder.create_trip_item(sample_trips[0])

        assert item.item_type == ItemType.TRIP
        assert item.amount == Decimal("375.00")
        assert item.amount > 0
        assert item.description == "Trip: Austin to Dallas"
        assert item.reference_id == 1

    def test_create_expense_item(self, sample_expenses):
        """Expense items are negative."""
        item = StatementItemBuilder.create_expense_item(sample_expenses[0])

        assert item.item_type == ItemType.EXPENSE
        assert item.amount == Decimal("-150.00")
        assert item.description == "Expense: Diesel"
        assert item.reference_id == 11

    def test_create_cash_advance_item(self, sample_cash_advances):
        """Cash advance items are negative."""
        item = StatementItemBuilder.create_cash_advance_item(sample_cash_advances[0])

        assert item.item_type == ItemType.CASH_ADVANCE
        assert item.amount == Decimal("-200.00")
        assert item.description == "Cash Advance: Road cash"

    def test_create_deduction_item(self, sample_deductions):
        """Deduction items are negative."""
        item = StatementItemBuilder.create_deduction_item(sample_deductions[1])

        assert item.item_type == ItemType.DEDUCTION
        assert item.amount == Decimal("-55.75")
        assert item.description == "Deduction: ELD lease"
        assert item.reference_id == 32

    def test_create_tax_withholding_item(self):
        """Tax withholding is a deduction rounded to cents with no reference."""
        item = StatementItemBuilder.create_tax_withholding_item(Decimal("83.3625"))

        assert item.item_type == ItemType.DEDUCTION
        assert item.amount == Decimal("-83.36")
        assert item.description == "Tax Withholding"
        assert item.reference_id is None

    def test_to_dict(self):
        """Items serialize with the enum value and a string amount."""
        item = StatementItemCandidate(
            item_type=ItemType.EXPENSE,
            amount=Decimal("-64.00"),
            description="Expense: Toll road",
            reference_id=12,
        )

        assert item.to_dict() == {
            "item_type": "expense",
            "reference_id": 12,
            "description": "Expense: Toll road",
            "amount": "-64.00",
        }


class TestBuildItems:
    """Test the full item list for a statement."""

    def test_item_order_and_count(
        self, sample_trips, sample_expenses, sample_cash_advances, sample_deductions
    ):
        """Trips, expenses, advances, deductions, then tax."""
        statement = _statement(
            sample_trips, sample_expenses, sample_cash_advances, sample_deductions
        )
        items = StatementItemBuilder.build_items(statement)

        assert [i.item_type for i in items] == [
            ItemType.TRIP,
            ItemType.TRIP,
            ItemType.TRIP,
            ItemType.EXPENSE,
            ItemType.EXPENSE,
            ItemType.CASH_ADVANCE,
            ItemType.DEDUCTION,
            ItemType.DEDUCTION,
            ItemType.DEDUCTION,
        ]
        assert items[-1].description == "Tax Withholding"

    def test_items_sum_to_rounded_net(
        self, sample_trips, sample_expenses, sample_cash_advances, sample_deductions
    ):
        """Items add up to net pay rounded to cents."""
        statement = _statement(
            sample_trips, sample_expenses, sample_cash_advances, sample_deductions
        )
        items = StatementItemBuilder.build_items(statement)

        assert StatementItemBuilder.sum_items(items) == Decimal("-147.36")
        assert not any(i.item_type == ItemType.ADJUSTMENT for i in items)

    def test_signs_are_valid(
        self, sample_trips, sample_expenses, sample_cash_advances, sample_deductions
    ):
        statement = _statement(
            sample_trips, sample_expenses, sample_cash_advances, sample_deductions
        )
        items = StatementItemBuilder.build_items(statement)

        assert StatementItemBuilder.validate_item_signs(items) == []

    def test_tax_item_present_without_trips(self):
        """A statement with no activity still carries a zero tax item."""
        items = StatementItemBuilder.build_items(_statement())

        assert len(items) == 1
        assert items[0].description == "Tax Withholding"
        assert items[0].amount == 0

    def test_rounding_adjustment_added(self, sample_trips):
        """Per-item rounding drift is absorbed by an adjustment item."""
        # Unrounded fixed trips: 0.125 + 0.125 = 0.25, items round to 0.13 + 0.13
        fixed = [replace(sample_trips[2], amount=Decimal("0.125")) for _ in range(2)]
        statement = _statement(fixed, tax_percent=0)
        items = StatementItemBuilder.build_items(statement)

        assert items[-1].item_type == ItemType.ADJUSTMENT
        assert items[-1].amount == Decimal("-0.01")
        assert items[-1].description == "Rounding adjustment"
        assert StatementItemBuilder.sum_items(items) == Decimal("0.25")

    def test_expense_credit_keeps_its_sign(self, sample_trips, sample_expenses):
        """A negative expense becomes a positive item with no adjustment."""
        trip = replace(sample_trips[0], amount=Decimal("100.00"))
        credit = replace(sample_expenses[0], amount=Decimal("-50.00"))
        statement = _statement([trip], [credit], tax_percent=0)

        items = StatementItemBuilder.build_items(statement)
        totals = StatementItemBuilder.sum_by_type(items)

        assert statement.net_pay == Decimal("150.00")
        assert items[1].item_type == ItemType.EXPENSE
        assert items[1].amount == Decimal("50.00")
        assert not any(i.item_type == ItemType.ADJUSTMENT for i in items)
        assert totals[ItemType.EXPENSE] == -statement.expense_total
        assert StatementItemBuilder.sum_items(items) == Decimal("150.00")
        assert len(StatementItemBuilder.validate_item_signs(items)) == 1

    def test_negative_trip_keeps_its_sign(self, sample_trips):
        """A negative trip amount is carried as is."""
        trip = replace(sample_trips[0], amount=Decimal("-20.00"))

        item = StatementItemBuilder.create_trip_item(trip)

        assert item.amount == Decimal("-20.00")

    def test_sum_by_type(
        self, sample_trips, sample_expenses, sample_cash_advances, sample_deductions
    ):
        statement = _statement(
            sample_trips, sample_expenses, sample_cash_advances, sample_deductions
        )
        totals = StatementItemBuilder.sum_by_type(StatementItemBuilder.build_items(statement))

        assert totals[ItemType.TRIP] == Decimal("555.75")
        assert totals[ItemType.EXPENSE] == Decimal("-214.00")
        assert totals[ItemType.CASH_ADVANCE] == Decimal("-200.00")
        assert totals[ItemType.DEDUCTION] == Decimal("-289.11")
        assert totals[ItemType.ADJUSTMENT] == 0


class TestValidateItemSigns:
    """Test sign validation."""

    def test_negative_trip_reported(self):
        items = [StatementItemCandidate(ItemType.TRIP, Decimal("-10.00"), "Trip: A to B")]

        errors = StatementItemBuilder.validate_item_signs(items)

        assert len(errors) == 1
        assert "expected positive" in errors[0]

    def test_positive_deduction_reported(self):
        items = [StatementItemCandidate(ItemType.DEDUCTION, Decimal("5.00"), "Deduction: x")]

        errors = StatementItemBuilder.validate_item_signs(items)

        assert len(errors) == 1
        assert "expected negative" in errors[0]

    def test_adjustment_either_sign(self):
        items = [
            StatementItemCandidate(ItemType.ADJUSTMENT, Decimal("0.01"), "Rounding adjustment"),
            StatementItemCandidate(ItemType.ADJUSTMENT, Decimal("-0.01"), "Rounding adjustment"),
        ]

        assert StatementItemBuilder.validate_item_signs(items) == []
