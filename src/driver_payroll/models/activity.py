"""Driver activity models: trips, expenses, cash advances and deductions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from driver_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from driver_payroll.models.company import Driver


class Trip(Base, TimestampMixin):
    """A single driving assignment generating driver earnings."""

    __tablename__ = "trip"

    trip_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    driver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("driver.driver_id", ondelete="CASCADE"),
        nullable=False,
    )
    load_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    trip_date: Mapped[date] = mapped_column(Date, nullable=False)
    origin: Mapped[str] = mapped_column(String, nullable=False)
    destination: Mapped[str] = mapped_column(String, nullable=False)
    distance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    rate_type: Mapped[str] = mapped_column(String, nullable=False)
    hours_worked: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed', 'cancelled')", name="trip_status_check"
        ),
        Index("ix_trip_driver_date", "company_id", "driver_id", "trip_date"),
    )

    # Relationships
    driver: Mapped[Driver] = relationship(back_populates="trips")


class Expense(Base, TimestampMixin):
    """An expense incurred by a driver."""

    __tablename__ = "expense"

    expense_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    driver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("driver.driver_id", ondelete="CASCADE"),
        nullable=False,
    )
    expense_date: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reimbursable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reimbursement_status: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "category IN ('fuel', 'maintenance', 'tolls', 'parking', 'meals', 'other')",
            name="expense_category_check",
        ),
        Index("ix_expense_driver_date", "company_id", "driver_id", "expense_date"),
    )


class CashAdvance(Base, TimestampMixin):
    """Cash advanced to a driver, recovered on the next pay statement."""

    __tablename__ = "cash_advance"

    cash_advance_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    driver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("driver.driver_id", ondelete="CASCADE"),
        nullable=False,
    )
    advance_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'paid')",
            name="cash_advance_status_check",
        ),
        Index("ix_cash_advance_driver_date", "company_id", "driver_id", "advance_date"),
    )


class Deduction(Base, TimestampMixin):
    """A deduction from driver pay."""

    __tablename__ = "deduction"

    deduction_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    driver_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("driver.driver_id", ondelete="CASCADE"),
        nullable=False,
    )
    pay_statement_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("pay_statement.pay_statement_id", ondelete="SET NULL"),
        nullable=True,
    )
    deduction_type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    deduction_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "deduction_type IN ('tax', 'insurance', 'retirement', 'other')",
            name="deduction_type_check",
        ),
        Index("ix_deduction_driver_date", "company_id", "driver_id", "deduction_date"),
    )
