"""Domain errors raised by the service layer."""

from __future__ import annotations

from datetime import date


class DriverNotFoundError(Exception):
    """Raised when a driver does not exist within the requesting company."""

    def __init__(self, company_id: int, driver_id: int):
        self.company_id = company_id
        self.driver_id = driver_id
        super().__init__(f"Driver {driver_id} not found for company {company_id}")


class StatementNotFoundError(Exception):
    """Raised when a pay statement does not exist within the requesting company."""

    def __init__(self, company_id: int, pay_statement_id: int):
        self.company_id = company_id
        self.pay_statement_id = pay_statement_id
        super().__init__(
            f"Pay statement {pay_statement_id} not found for company {company_id}"
        )


class TripNotFoundError(Exception):
    """Raised when a trip does not exist within the requesting company."""

    def __init__(self, company_id: int, trip_id: int):
        self.company_id = company_id
        self.trip_id = trip_id
        super().__init__(f"Trip {trip_id} not found for company {company_id}")


class ExpenseNotFoundError(Exception):
    """Raised when an expense does not exist within the requesting company."""

    def __init__(self, company_id: int, expense_id: int):
        self.company_id = company_id
        self.expense_id = expense_id
        super().__init__(f"Expense {expense_id} not found for company {company_id}")


class CashAdvanceNotFoundError(Exception):
    def __init__(self, company_id: int, cash_advance_id: int):
        self.company_id = company_id
        self.cash_advance_id = cash_advance_id
        super().__init__(
            f"Cash advance {cash_advance_id} not found for company {company_id}"
        )


class DeductionNotFoundError(Exception):
    def __init__(self, company_id: int, deduction_id: int):
        self.company_id = company_id
        self.deduction_id = deduction_id
        super().__init__(f"Deduction {deduction_id} not found for company {company_id}")


class InvalidPeriodError(ValueError):
    """Raised when a pay period starts after it ends."""

    def __init__(self, period_start: date, period_end: date):
        self.period_start = period_start
        self.period_end = period_end
        super().__init__(f"Period start {period_start} is after period end {period_end}")


class StatementLockedError(Exception):
    """Raised when a non-draft statement is modified."""

    def __init__(self, pay_statement_id: int, status: str):
        self.pay_statement_id = pay_statement_id
        self.status = status
        super().__init__(
            f"Pay statement {pay_statement_id} is '{status}' and can no longer be changed"
        )
