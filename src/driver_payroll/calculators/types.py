"""Type definitions for pay statement calculation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class RateType(str, Enum):
    """Trip pricing methods."""

    PER_MILE = "per_mile"
    PERCENTAGE = "percentage"
    HOURLY = "hourly"
    FIXED = "fixed"


class ItemType(str, Enum):
    """Pay statement item types."""

    TRIP = "trip"
    EXPENSE = "expense"
    CASH_ADVANCE = "cash_advance"
    DEDUCTION = "deduction"
    ADJUSTMENT = "adjustment"


class StatementStatus(str, Enum):
    """Pay statement status values."""

    DRAFT = "draft"
    FINALIZED = "finalized"
    PAID = "paid"


@dataclass
class TripRecord:
    """A completed trip as seen by the aggregator."""

    company_id: int
    driver_id: int
    trip_date: date
    origin: str
    destination: str
    distance: Decimal
    rate: Decimal
    rate_type: str
    amount: Decimal | None
    status: str = "completed"
    hours_worked: Decimal | None = None
    load_id: int | None = None
    id: int | None = None


@dataclass
class ExpenseRecord:
    """A driver expense."""

    company_id: int
    driver_id: int
    expense_date: date
    category: str
    amount: Decimal
    description: str
    reimbursable: bool = False
    reimbursement_status: str | None = None
    id: int | None = None


@dataclass
class CashAdvanceRecord:
    """Cash advanced to a driver ahead of payroll."""

    company_id: int
    driver_id: int
    advance_date: date
    amount: Decimal
    description: str
    status: str = "approved"
    id: int | None = None


@dataclass
class DeductionRecord:
    """A deduction taken from driver pay (insurance, retirement, etc.)."""

    company_id: int
    driver_id: int
    deduction_type: str
    description: str
    amount: Decimal
    deduction_date: date
    id: int | None = None


@dataclass
class PayStatementData:
    """A reconciled pay statement for one driver and period.

    Invariants:
    - gross_pay == trip_total
    - net_pay == gross_pay - expense_total - cash_advance_total
                 - tax_withholding - deductions_total
    """

    company_id: int
    driver_id: int
    driver_name: str
    period_start: date
    period_end: date
    trips: list[TripRecord]
    expenses: list[ExpenseRecord]
    cash_advances: list[CashAdvanceRecord]
    deductions: list[DeductionRecord]
    trip_total: Decimal
    expense_total: Decimal
    cash_advance_total: Decimal
    gross_pay: Decimal
    tax_withholding: Decimal
    deductions_total: Decimal
    net_pay: Decimal
    generated_date: date
    status: str = StatementStatus.DRAFT.value
    id: int | None = None
    trip_details: str | None = None

    def totals(self) -> dict[str, Decimal]:
        """Return the computed totals keyed by name."""
        return {
            "trip_total": self.trip_total,
            "expense_total": self.expense_total,
            "cash_advance_total": self.cash_advance_total,
            "gross_pay": self.gross_pay,
            "tax_withholding": self.tax_withholding,
            "deductions_total": self.deductions_total,
            "net_pay": self.net_pay,
        }


@dataclass
class StatementItemCandidate:
    """A pay statement item before persistence."""

    item_type: ItemType
    amount: Decimal  # Signed: trips positive, everything else negative
    description: str
    reference_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_type": self.item_type.value,
            "reference_id": self.reference_id,
            "description": self.description,
            "amount": str(self.amount),
        }


@dataclass
class TripStats:
    """Aggregate trip figures for a driver or company."""

    total_trips: int = 0
    total_miles: Decimal = Decimal("0")
    total_earnings: Decimal = Decimal("0")
    average_rate: Decimal = Decimal("0")
    unique_drivers: int | None = None


@dataclass
class ExpenseCategoryTotal:
    """Expense count and amount for one category."""

    category: str
    expense_count: int = 0
    total_amount: Decimal = Decimal("0")
