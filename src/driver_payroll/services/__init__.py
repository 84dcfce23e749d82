"""Driver payroll services."""

from driver_payroll.services.cash_advance_service import CashAdvanceService
from driver_payroll.services.deduction_service import DeductionService
from driver_payroll.services.errors import (
    CashAdvanceNotFoundError,
    DeductionNotFoundError,
    DriverNotFoundError,
    ExpenseNotFoundError,
    InvalidPeriodError,
    StatementLockedError,
    StatementNotFoundError,
    TripNotFoundError,
)
from driver_payroll.services.expense_service import ExpenseService
from driver_payroll.services.pay_statement_service import DriverActivity, PayStatementService
from driver_payroll.services.state_machine import InvalidTransitionError, PayStatementStateMachine
from driver_payroll.services.trip_service import TripService

__all__ = [
    "CashAdvanceNotFoundError",
    "CashAdvanceService",
    "DeductionNotFoundError",
    "DeductionService",
    "DriverActivity",
    "DriverNotFoundError",
    "ExpenseNotFoundError",
    "ExpenseService",
    "InvalidPeriodError",
    "InvalidTransitionError",
    "PayStatementService",
    "PayStatementStateMachine",
    "StatementLockedError",
    "StatementNotFoundError",
    "TripNotFoundError",
    "TripService",
]
