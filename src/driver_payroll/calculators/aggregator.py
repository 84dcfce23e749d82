"""Pay statement aggregator - turns a driver's period activity into a statement."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from driver_payroll.calculators.trip_pricing import Number, to_decimal
from driver_payroll.calculators.types import (
    CashAdvanceRecord,
    DeductionRecord,
    ExpenseRecord,
    PayStatementData,
    StatementStatus,
    TripRecord,
)

DEFAULT_TAX_WITHHOLDING_PERCENT = Decimal("15")

ZERO = Decimal("0")


class PayStatementAggregator:
    """Computes totals and a draft pay statement from materialized records.

    Pipeline:
    1) Sum trip, expense, cash advance and deduction amounts
    2) gross = trip total
    3) tax withholding = gross * percent / 100
    4) net = gross - expenses - advances - tax - deductions

    Totals are not re-rounded; trip amounts are already at cents and
    tax withholding keeps its full precision.
    """

    @staticmethod
    def trip_total(trips: Iterable[TripRecord] | None) -> Decimal:
        """Sum trip amounts. Trips without an amount count as zero."""
        total = ZERO
        for trip in trips or ():
            if trip.amount is not None:
                total += trip.amount
        return total

    @staticmethod
    def expense_total(expenses: Iterable[ExpenseRecord] | None) -> Decimal:
        """Sum expense amounts."""
        return sum((e.amount for e in expenses or ()), ZERO)

    @staticmethod
    def cash_advance_total(advances: Iterable[CashAdvanceRecord] | None) -> Decimal:
        """Sum cash advance amounts."""
        return sum((a.amount for a in advances or ()), ZERO)

    @staticmethod
    def deductions_total(deductions: Iterable[DeductionRecord] | None) -> Decimal:
        """Sum deduction amounts."""
        return sum((d.amount for d in deductions or ()), ZERO)

    @staticmethod
    def tax_withholding(
        gross_pay: Decimal, percent: Number = DEFAULT_TAX_WITHHOLDING_PERCENT
    ) -> Decimal:
        """Compute tax withholding as a percentage of gross pay."""
        return gross_pay * (to_decimal(percent) / 100)

    @classmethod
    def generate(
        cls,
        company_id: int,
        driver_id: int,
        driver_name: str,
        period_start: date,
        period_end: date,
        trips: list[TripRecord] | None,
        expenses: list[ExpenseRecord] | None,
        cash_advances: list[CashAdvanceRecord] | None,
        deductions: list[DeductionRecord] | None,
        tax_percent: Number = DEFAULT_TAX_WITHHOLDING_PERCENT,
        trip_details: str | None = None,
    ) -> PayStatementData:
        """Compose a draft pay statement for one driver and period."""
        trips = list(trips or [])
        expenses = list(expenses or [])
        cash_advances = list(cash_advances or [])
        deductions = list(deductions or [])

        trip_total = cls.trip_total(trips)
        expense_total = cls.expense_total(expenses)
        cash_advance_total = cls.cash_advance_total(cash_advances)
        gross_pay = trip_total
        tax_withholding = cls.tax_withholding(gross_pay, tax_percent)
        deductions_total = cls.deductions_total(deductions)
        net_pay = (
            gross_pay
            - expense_total
            - cash_advance_total
            - tax_withholding
            - deductions_total
        )

        return PayStatementData(
            company_id=company_id,
            driver_id=driver_id,
            driver_name=driver_name,
            period_start=period_start,
            period_end=period_end,
            trips=trips,
            expenses=expenses,
            cash_advances=cash_advances,
            deductions=deductions,
            trip_total=trip_total,
            expense_total=expense_total,
            cash_advance_total=cash_advance_total,
            gross_pay=gross_pay,
            tax_withholding=tax_withholding,
            deductions_total=deductions_total,
            net_pay=net_pay,
            generated_date=date.today(),
            status=StatementStatus.DRAFT.value,
            trip_details=trip_details,
        )
