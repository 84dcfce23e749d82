"""Pytest fixtures for driver payroll tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from driver_payroll.calculators.types import (
    CashAdvanceRecord,
    DeductionRecord,
    ExpenseRecord,
    TripRecord,
)
from driver_payroll.config import Settings
from driver_payroll.models import (
    Base,
    CashAdvance,
    Company,
    Deduction,
    Driver,
    Expense,
    Trip,
)

# In-memory SQLite shared across connections of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PERIOD_START = date(2025, 3, 1)
PERIOD_END = date(2025, 3, 15)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        default_tax_withholding_percent=Decimal("15"),
        company_name="NeoPay",
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
    )


@pytest_asyncio.fixture
async def engine():
    """Create test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for a test."""
    async with session_factory() as session:
        yield session


# ============================================================================
# Seed data
# ============================================================================


@dataclass
class SeededCompany:
    company: Company
    driver: Driver
    other_company: Company
    other_driver: Driver


@pytest_asyncio.fixture
async def seeded(session: AsyncSession) -> SeededCompany:
    """Two companies with one driver each."""
    company = Company(name="Lone Star Freight", tax_id="74-1234567")
    other_company = Company(name="Gulf Coast Haulers")
    session.add_all([company, other_company])
    await session.flush()

    driver = Driver(
        company_id=company.company_id,
        name="Dana Reyes",
        email="dana@example.com",
        license="TX-CDL-0042",
        employment_type="1099",
        driver_type="owner",
    )
    other_driver = Driver(company_id=other_company.company_id, name="Sam Ortiz")
    session.add_all([driver, other_driver])
    await session.commit()

    return SeededCompany(
        company=company,
        driver=driver,
        other_company=other_company,
        other_driver=other_driver,
    )


@dataclass
class SeededActivity:
    trips: list[Trip]
    expenses: list[Expense]
    cash_advances: list[CashAdvance]
    deductions: list[Deduction]


@pytest_asyncio.fixture
async def activity(session: AsyncSession, seeded: SeededCompany) -> SeededActivity:
    """One pay period of activity for the seeded driver.

    Trips 555.75, expenses 214.00, advances 200.00, deductions 205.75.
    A trip after the period and a trip for another company are also seeded.
    """
    company_id = seeded.company.company_id
    driver_id = seeded.driver.driver_id

    trips = [
        Trip(
            company_id=company_id,
            driver_id=driver_id,
            trip_date=date(2025, 3, 3),
            origin="Austin",
            destination="Dallas",
            distance=Decimal("250"),
            rate=Decimal("1.50"),
            rate_type="per_mile",
            amount=Decimal("375.00"),
            status="completed",
        ),
        Trip(
            company_id=company_id,
            driver_id=driver_id,
            trip_date=date(2025, 3, 7),
            origin="Dallas",
            destination="Houston",
            distance=Decimal("300"),
            rate=Decimal("30"),
            rate_type="percentage",
            amount=Decimal("180.00"),
            status="completed",
        ),
        Trip(
            company_id=company_id,
            driver_id=driver_id,
            trip_date=date(2025, 3, 10),
            origin="Houston",
            destination="Katy",
            distance=Decimal("30"),
            rate=Decimal("0.75"),
            rate_type="fixed",
            amount=Decimal("0.75"),
            status="completed",
        ),
    ]
    expenses = [
        Expense(
            company_id=company_id,
            driver_id=driver_id,
            expense_date=date(2025, 3, 4),
            category="fuel",
            amount=Decimal("150.00"),
            description="Diesel",
        ),
        Expense(
            company_id=company_id,
            driver_id=driver_id,
            expense_date=date(2025, 3, 8),
            category="tolls",
            amount=Decimal("64.00"),
            description="Toll road",
        ),
    ]
    cash_advances = [
        CashAdvance(
            company_id=company_id,
            driver_id=driver_id,
            advance_date=date(2025, 3, 5),
            amount=Decimal("200.00"),
            description="Road cash",
            status="approved",
        ),
    ]
    deductions = [
        Deduction(
            company_id=company_id,
            driver_id=driver_id,
            deduction_type="insurance",
            description="Cargo insurance",
            amount=Decimal("150.00"),
            deduction_date=date(2025, 3, 1),
        ),
        Deduction(
            company_id=company_id,
            driver_id=driver_id,
            deduction_type="other",
            description="ELD lease",
            amount=Decimal("55.75"),
            deduction_date=date(2025, 3, 15),
        ),
    ]
    outside = [
        Trip(
            company_id=company_id,
            driver_id=driver_id,
            trip_date=date(2025, 3, 20),
            origin="Katy",
            destination="Austin",
            distance=Decimal("160"),
            rate=Decimal("1.50"),
            rate_type="per_mile",
            amount=Decimal("240.00"),
            status="completed",
        ),
        Trip(
            company_id=seeded.other_company.company_id,
            driver_id=seeded.other_driver.driver_id,
            trip_date=date(2025, 3, 3),
            origin="Mobile",
            destination="Biloxi",
            distance=Decimal("60"),
            rate=Decimal("2.00"),
            rate_type="per_mile",
            amount=Decimal("120.00"),
            status="completed",
        ),
    ]
    session.add_all([*trips, *expenses, *cash_advances, *deductions, *outside])
    await session.commit()

    return SeededActivity(
        trips=trips,
        expenses=expenses,
        cash_advances=cash_advances,
        deductions=deductions,
    )


# ============================================================================
# In-memory records
# ============================================================================


@pytest.fixture
def sample_trips() -> list[TripRecord]:
    return [
        TripRecord(
            id=1,
            company_id=1,
            driver_id=7,
            trip_date=date(2025, 3, 3),
            origin="Austin",
            destination="Dallas",
            distance=Decimal("250"),
            rate=Decimal("1.50"),
            rate_type="per_mile",
            amount=Decimal("375.00"),
        ),
        TripRecord(
            id=2,
            company_id=1,
            driver_id=7,
            trip_date=date(2025, 3, 7),
            origin="Dallas",
            destination="Houston",
            distance=Decimal("300"),
            rate=Decimal("30"),
            rate_type="percentage",
            amount=Decimal("180.00"),
        ),
        TripRecord(
            id=3,
            company_id=1,
            driver_id=7,
            trip_date=date(2025, 3, 10),
            origin="Houston",
            destination="Katy",
            distance=Decimal("30"),
            rate=Decimal("0.75"),
            rate_type="fixed",
            amount=Decimal("0.75"),
        ),
    ]


@pytest.fixture
def sample_expenses() -> list[ExpenseRecord]:
    return [
        ExpenseRecord(
            id=11,
            company_id=1,
            driver_id=7,
            expense_date=date(2025, 3, 4),
            category="fuel",
            amount=Decimal("150.00"),
            description="Diesel",
        ),
        ExpenseRecord(
            id=12,
            company_id=1,
            driver_id=7,
            expense_date=date(2025, 3, 8),
            category="tolls",
            amount=Decimal("64.00"),
            description="Toll road",
        ),
    ]


@pytest.fixture
def sample_cash_advances() -> list[CashAdvanceRecord]:
    return [
        CashAdvanceRecord(
            id=21,
            company_id=1,
            driver_id=7,
            advance_date=date(2025, 3, 5),
            amount=Decimal("200.00"),
            description="Road cash",
        ),
    ]


@pytest.fixture
def sample_deductions() -> list[DeductionRecord]:
    return [
        DeductionRecord(
            id=31,
            company_id=1,
            driver_id=7,
            deduction_type="insurance",
            description="Cargo insurance",
            amount=Decimal("150.00"),
            deduction_date=date(2025, 3, 1),
        ),
        DeductionRecord(
            id=32,
            company_id=1,
            driver_id=7,
            deduction_type="other",
            description="ELD lease",
            amount=Decimal("55.75"),
            deduction_date=date(2025, 3, 15),
        ),
    ]
