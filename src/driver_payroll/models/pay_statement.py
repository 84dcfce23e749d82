"""Pay statement models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from driver_payroll.models.base import Base, TimestampMixin


class PayStatement(Base, TimestampMixin):
    """Persisted pay statement totals for one driver and period."""

    __tablename__ = "pay_statement"

    pay_statement_id: Mapped[int] = mapped_column(
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
    driver_name: Mapped[str] = mapped_column(String, nullable=False)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    trip_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    expense_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    cash_advance_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    gross_pay: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_withholding: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    deductions_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    net_pay: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    generated_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    trip_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'finalized', 'paid')", name="pay_statement_status_check"
        ),
        CheckConstraint("period_start <= period_end", name="pay_statement_period_check"),
    )

    # Relationships
    items: Mapped[list[PayStatementItem]] = relationship(
        back_populates="statement",
        cascade="all, delete-orphan",
        order_by="PayStatementItem.pay_statement_item_id",
    )


class PayStatementItem(Base, TimestampMixin):
    """One signed line of a pay statement."""

    __tablename__ = "pay_statement_item"

    pay_statement_item_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    pay_statement_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pay_statement.pay_statement_id", ondelete="CASCADE"),
        nullable=False,
    )
    item_type: Mapped[str] = mapped_column(String, nullable=False)
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "item_type IN ('trip', 'expense', 'cash_advance', 'deduction', 'adjustment')",
            name="pay_statement_item_type_check",
        ),
    )

    # Relationships
    statement: Mapped[PayStatement] = relationship(back_populates="items")
