"""SQLAlchemy ORM models."""

from driver_payroll.models.base import Base, TimestampMixin
from driver_payroll.models.company import Company, Driver
from driver_payroll.models.activity import CashAdvance, Deduction, Expense, Trip
from driver_payroll.models.pay_statement import PayStatement, PayStatementItem

__all__ = [
    "Base",
    "TimestampMixin",
    "Company",
    "Driver",
    "Trip",
    "Expense",
    "CashAdvance",
    "Deduction",
    "PayStatement",
    "PayStatementItem",
]
