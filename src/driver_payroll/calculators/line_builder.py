"""Pay statement item builder."""

from __future__ import annotations

from decimal import Decimal

from driver_payroll.calculators.trip_pricing import round_to_cents
from driver_payroll.calculators.types import (
    CashAdvanceRecord,
    DeductionRecord,
    ExpenseRecord,
    ItemType,
    PayStatementData,
    StatementItemCandidate,
    TripRecord,
)


class StatementItemBuilder:
    """Flattens a pay statement into signed, persistable items.

    Sign conventions:
    - TRIP: the trip amount as recorded
    - EXPENSE, CASH_ADVANCE, DEDUCTION: the negated record amount
    - ADJUSTMENT: either sign

    A credit (a negative expense, advance or deduction) therefore lands
    as a positive item; validate_item_signs reports it.

    Every item is rounded to cents. If the rounded items do not add up
    to the rounded net pay an adjustment item absorbs the difference.
    """

    TAX_WITHHOLDING_DESCRIPTION = "Tax Withholding"

    @staticmethod
    def create_trip_item(trip: TripRecord) -> StatementItemCandidate:
        """Create a trip earning item (positive amount)."""
        amount = trip.amount if trip.amount is not None else Decimal("0")
        return StatementItemCandidate(
            item_type=ItemType.TRIP,
            amount=round_to_cents(amount),
            description=f"Trip: {trip.origin} to {trip.destination}",
            reference_id=trip.id,
        )

    @staticmethod
    def create_expense_item(expense: ExpenseRecord) -> StatementItemCandidate:
        """Create an expense item (negative amount)."""
        return StatementItemCandidate(
            item_type=ItemType.EXPENSE,
            amount=-round_to_cents(expense.amount),
            description=f"Expense: {expense.description}",
            reference_id=expense.id,
        )

    @staticmethod
    def create_cash_advance_item(advance: CashAdvanceRecord) -> StatementItemCandidate:
        """Create a cash advance item (negative amount)."""
        return StatementItemCandidate(
            item_type=ItemType.CASH_ADVANCE,
            amount=-round_to_cents(advance.amount),
            description=f"Cash Advance: {advance.description}",
            reference_id=advance.id,
        )

    @staticmethod
    def create_deduction_item(deduction: DeductionRecord) -> StatementItemCandidate:
        """Create a deduction item (negative amount)."""
        return StatementItemCandidate(
            item_type=ItemType.DEDUCTION,
            amount=-round_to_cents(deduction.amount),
            description=f"Deduction: {deduction.description}",
            reference_id=deduction.id,
        )

    @staticmethod
    def create_tax_withholding_item(tax_withholding: Decimal) -> StatementItemCandidate:
        """Create the synthetic tax withholding deduction item."""
        return StatementItemCandidate(
            item_type=ItemType.DEDUCTION,
            amount=-round_to_cents(tax_withholding),
            description=StatementItemBuilder.TAX_WITHHOLDING_DESCRIPTION,
        )

    @staticmethod
    def create_adjustment_item(amount: Decimal) -> StatementItemCandidate:
        """Create a rounding adjustment item."""
        return StatementItemCandidate(
            item_type=ItemType.ADJUSTMENT,
            amount=round_to_cents(amount),
            description="Rounding adjustment",
        )

    @classmethod
    def build_items(cls, statement: PayStatementData) -> list[StatementItemCandidate]:
        """Build the full item list for a statement.

        Order: trips, expenses, cash advances, deductions, tax withholding,
        then a rounding adjustment when needed.
        """
        items: list[StatementItemCandidate] = []
        items.extend(cls.create_trip_item(t) for t in statement.trips)
        items.extend(cls.create_expense_item(e) for e in statement.expenses)
        items.extend(cls.create_cash_advance_item(a) for a in statement.cash_advances)
        items.extend(cls.create_deduction_item(d) for d in statement.deductions)
        items.append(cls.create_tax_withholding_item(statement.tax_withholding))

        return cls.reconcile_rounding(items, round_to_cents(statement.net_pay))

    @staticmethod
    def sum_items(items: list[StatementItemCandidate]) -> Decimal:
        """Sum all item amounts."""
        total = Decimal("0")
        for item in items:
            total += item.amount
        return total

    @classmethod
    def reconcile_rounding(
        cls, items: list[StatementItemCandidate], expected_net: Decimal
    ) -> list[StatementItemCandidate]:
        """Append an adjustment item if the items drift from expected net."""
        diff = expected_net - cls.sum_items(items)
        if diff == 0:
            return items
        return items + [cls.create_adjustment_item(diff)]

    @staticmethod
    def validate_item_signs(items: list[StatementItemCandidate]) -> list[str]:
        """Validate that all items have correct signs.

        Returns list of error messages (empty if all valid).
        """
        errors: list[str] = []

        for i, item in enumerate(items):
            if item.item_type == ItemType.TRIP:
                if item.amount < 0:
                    errors.append(
                        f"Item {i} ({item.item_type.value}) has negative amount {item.amount}, expected positive"
                    )
            elif item.item_type != ItemType.ADJUSTMENT:
                if item.amount > 0:
                    errors.append(
                        f"Item {i} ({item.item_type.value}) has positive amount {item.amount}, expected negative"
                    )

        return errors

    @staticmethod
    def sum_by_type(items: list[StatementItemCandidate]) -> dict[ItemType, Decimal]:
        """Sum item amounts by type."""
        totals: dict[ItemType, Decimal] = {it: Decimal("0") for it in ItemType}
        for item in items:
            totals[item.item_type] += item.amount
        return totals
