"""Company and driver models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from driver_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from driver_payroll.models.activity import Trip


class Company(Base, TimestampMixin):
    """A trucking company (the tenant every record is scoped to)."""

    __tablename__ = "company"

    company_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    tax_id: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="Active")

    __table_args__ = (
        CheckConstraint(
            "status IN ('Active', 'Inactive', 'Suspended')", name="company_status_check"
        ),
    )

    # Relationships
    drivers: Mapped[list[Driver]] = relationship(back_populates="company")


class Driver(Base, TimestampMixin):
    """A driver employed by or contracted to a company."""

    __tablename__ = "driver"

    driver_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    license: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    driver_type: Mapped[str] = mapped_column(String, nullable=False, default="company")
    employment_type: Mapped[str] = mapped_column(String, nullable=False, default="W2")
    join_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    pay_rate: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    pay_rate_type: Mapped[str | None] = mapped_column(String, nullable=True)
    tax_withholding_percent: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), nullable=True
    )

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="driver_status_check"),
        CheckConstraint("driver_type IN ('company', 'owner')", name="driver_type_check"),
        CheckConstraint(
            "employment_type IN ('W2', '1099')", name="driver_employment_type_check"
        ),
    )

    # Relationships
    company: Mapped[Company] = relationship(back_populates="drivers")
    trips: Mapped[list[Trip]] = relationship(back_populates="driver")
