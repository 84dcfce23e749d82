"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from driver_payroll.calculators.types import ItemType, RateType, StatementStatus

# Trip fields a PATCH may clear with an explicit null
NULLABLE_TRIP_FIELDS = ("hours_worked", "load_id")


# ============================================================================
# Trip schemas
# ============================================================================


class TripCreate(BaseModel):
    """Schema for creating a trip. The amount is computed server-side."""

    driver_id: int
    trip_date: date
    origin: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    distance: Decimal = Field(ge=0)
    rate: Decimal = Field(ge=0)
    rate_type: RateType
    hours_worked: Decimal | None = Field(default=None, ge=0)
    load_id: int | None = None
    status: Literal["pending", "completed", "cancelled"] = "pending"


class TripUpdate(BaseModel):
    """Schema for a partial trip update."""

    driver_id: int | None = None
    trip_date: date | None = None
    origin: str | None = Field(default=None, min_length=1)
    destination: str | None = Field(default=None, min_length=1)
    distance: Decimal | None = Field(default=None, ge=0)
    rate: Decimal | None = Field(default=None, ge=0)
    rate_type: RateType | None = None
    hours_worked: Decimal | None = Field(default=None, ge=0)
    load_id: int | None = None
    status: Literal["pending", "completed", "cancelled"] | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the client, enums as plain values."""
        data = {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name in NULLABLE_TRIP_FIELDS
        }
        if "rate_type" in data:
            data["rate_type"] = RateType(data["rate_type"]).value
        return data


class TripResponse(BaseModel):
    """Schema for trip response."""

    model_config = ConfigDict(from_attributes=True)

    trip_id: int
    company_id: int
    driver_id: int
    load_id: int | None = None
    trip_date: date
    origin: str
    destination: str
    distance: Decimal
    rate: Decimal
    rate_type: str
    hours_worked: Decimal | None = None
    amount: Decimal
    status: str


class TripListResponse(BaseModel):
    """Schema for listing trips."""

    items: list[TripResponse]
    total: int


class TripStatsResponse(BaseModel):
    """Schema for trip statistics."""

    model_config = ConfigDict(from_attributes=True)

    total_trips: int
    total_miles: Decimal
    total_earnings: Decimal
    average_rate: Decimal
    unique_drivers: int | None = None


# ============================================================================
# Expense, cash advance and deduction schemas
# ============================================================================

ExpenseCategory = Literal["fuel", "maintenance", "tolls", "parking", "meals", "other"]
ReimbursementStatus = Literal["pending", "approved", "rejected", "paid"]
CashAdvanceStatus = Literal["pending", "approved", "rejected", "paid"]
DeductionType = Literal["tax", "insurance", "retirement", "other"]


class ExpenseCreate(BaseModel):
    """Schema for recording an expense."""

    driver_id: int
    expense_date: date
    category: ExpenseCategory
    amount: Decimal
    description: str = ""
    reimbursable: bool = False
    reimbursement_status: ReimbursementStatus | None = None


class ExpenseUpdate(BaseModel):
    """Schema for a partial expense update."""

    driver_id: int | None = None
    expense_date: date | None = None
    category: ExpenseCategory | None = None
    amount: Decimal | None = None
    description: str | None = None
    reimbursable: bool | None = None
    reimbursement_status: ReimbursementStatus | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the client."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name == "reimbursement_status"
        }


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    expense_id: int
    company_id: int
    driver_id: int
    expense_date: date
    category: str
    amount: Decimal
    description: str
    reimbursable: bool
    reimbursement_status: str | None = None


class ExpenseListResponse(BaseModel):
    items: list[ExpenseResponse]
    total: int


class ExpenseCategoryTotalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    expense_count: int
    total_amount: Decimal


class CashAdvanceCreate(BaseModel):
    """Schema for recording a cash advance."""

    driver_id: int
    advance_date: date
    amount: Decimal
    description: str = ""
    status: CashAdvanceStatus = "pending"


class CashAdvanceStatusUpdate(BaseModel):
    status: CashAdvanceStatus


class CashAdvanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cash_advance_id: int
    company_id: int
    driver_id: int
    advance_date: date
    amount: Decimal
    description: str
    status: str


class CashAdvanceListResponse(BaseModel):
    items: list[CashAdvanceResponse]
    total: int


class DeductionCreate(BaseModel):
    """Schema for recording a deduction."""

    driver_id: int
    deduction_date: date
    deduction_type: DeductionType
    amount: Decimal
    description: str = ""


class DeductionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deduction_id: int
    company_id: int
    driver_id: int
    pay_statement_id: int | None = None
    deduction_date: date
    deduction_type: str
    amount: Decimal
    description: str


class DeductionListResponse(BaseModel):
    items: list[DeductionResponse]
    total: int


# ============================================================================
# Pay statement record schemas
# ============================================================================


class StatementTrip(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    trip_date: date
    origin: str
    destination: str
    distance: Decimal
    rate: Decimal
    rate_type: str
    hours_worked: Decimal | None = None
    amount: Decimal | None = None
    status: str


class StatementExpense(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    expense_date: date
    category: str
    amount: Decimal
    description: str
    reimbursable: bool
    reimbursement_status: str | None = None


class StatementCashAdvance(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    advance_date: date
    amount: Decimal
    description: str
    status: str


class StatementDeduction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    deduction_type: str
    description: str
    amount: Decimal
    deduction_date: date


# ============================================================================
# Pay statement schemas
# ============================================================================


class PayStatementRequest(BaseModel):
    """Schema for generating a pay statement."""

    driver_id: int
    period_start: date
    period_end: date
    tax_withholding_percent: Decimal | None = Field(default=None, ge=0, le=100)
    trip_details: str | None = None


class StatementItemResponse(BaseModel):
    """Schema for a pay statement item."""

    model_config = ConfigDict(from_attributes=True)

    item_type: ItemType
    reference_id: int | None = None
    description: str
    amount: Decimal


class PayStatementResponse(BaseModel):
    """Schema for a full pay statement with its records and items."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    company_id: int
    driver_id: int
    driver_name: str
    period_start: date
    period_end: date
    trips: list[StatementTrip]
    expenses: list[StatementExpense]
    cash_advances: list[StatementCashAdvance]
    deductions: list[StatementDeduction]
    trip_total: Decimal
    expense_total: Decimal
    cash_advance_total: Decimal
    gross_pay: Decimal
    tax_withholding: Decimal
    deductions_total: Decimal
    net_pay: Decimal
    generated_date: date
    status: str
    trip_details: str | None = None
    items: list[StatementItemResponse] = []


class PayStatementSummary(BaseModel):
    """Schema for a saved pay statement in a listing."""

    model_config = ConfigDict(from_attributes=True)

    pay_statement_id: int
    driver_id: int
    driver_name: str
    period_start: date
    period_end: date
    gross_pay: Decimal
    net_pay: Decimal
    generated_date: date
    status: str


class PayStatementListResponse(BaseModel):
    """Schema for listing pay statements."""

    items: list[PayStatementSummary]
    total: int


class StatusTransitionRequest(BaseModel):
    """Schema for a status change."""

    status: StatementStatus


class StatusTransitionResponse(BaseModel):
    """Schema for status change response."""

    pay_statement_id: int
    from_status: str
    status: str
    next_statuses: list[str]


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
