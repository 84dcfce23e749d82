"""Pay statement service - fetches driver activity, generates and persists statements."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from driver_payroll.calculators.aggregator import PayStatementAggregator
from driver_payroll.calculators.line_builder import StatementItemBuilder
from driver_payroll.calculators.trip_pricing import round_to_cents, to_decimal
from driver_payroll.calculators.types import (
    CashAdvanceRecord,
    DeductionRecord,
    ExpenseRecord,
    ItemType,
    PayStatementData,
    StatementItemCandidate,
    TripRecord,
)
from driver_payroll.config import Settings, get_settings
from driver_payroll.models import (
    CashAdvance,
    Deduction,
    Driver,
    Expense,
    PayStatement,
    PayStatementItem,
    Trip,
)
from driver_payroll.services.errors import (
    DriverNotFoundError,
    InvalidPeriodError,
    StatementLockedError,
    StatementNotFoundError,
)
from driver_payroll.services.records import (
    cash_advance_record,
    deduction_record,
    expense_record,
    trip_record,
)
from driver_payroll.services.state_machine import PayStatementStateMachine

logger = logging.getLogger(__name__)


@dataclass
class DriverActivity:
    """The four record collections a statement is built from."""

    trips: list[TripRecord] = field(default_factory=list)
    expenses: list[ExpenseRecord] = field(default_factory=list)
    cash_advances: list[CashAdvanceRecord] = field(default_factory=list)
    deductions: list[DeductionRecord] = field(default_factory=list)


class PayStatementService:
    """Service for the pay statement lifecycle.

    Operations:
    - fetch_driver_activity: load trips/expenses/advances/deductions for a period
    - generate_statement: run the aggregator over the loaded activity
    - save_statement: persist totals and signed items
    - load_statement: rebuild a saved statement with its source records
    - transition_status: draft → finalized → paid
    """

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()

    async def get_driver(self, company_id: int, driver_id: int) -> Driver:
        """Load a driver scoped to a company."""
        driver = await self.session.get(Driver, driver_id)
        if driver is None or driver.company_id != company_id:
            raise DriverNotFoundError(company_id, driver_id)
        return driver

    async def fetch_driver_activity(
        self,
        company_id: int,
        driver_id: int,
        period_start: date,
        period_end: date,
    ) -> DriverActivity:
        """Load a driver's records for an inclusive date range, newest first."""
        trips = await self.session.execute(
            select(Trip)
            .where(
                Trip.company_id == company_id,
                Trip.driver_id == driver_id,
                Trip.trip_date >= period_start,
                Trip.trip_date <= period_end,
            )
            .order_by(Trip.trip_date.desc(), Trip.trip_id.desc())
        )
        expenses = await self.session.execute(
            select(Expense)
            .where(
                Expense.company_id == company_id,
                Expense.driver_id == driver_id,
                Expense.expense_date >= period_start,
                Expense.expense_date <= period_end,
            )
            .order_by(Expense.expense_date.desc(), Expense.expense_id.desc())
        )
        advances = await self.session.execute(
            select(CashAdvance)
            .where(
                CashAdvance.company_id == company_id,
                CashAdvance.driver_id == driver_id,
                CashAdvance.advance_date >= period_start,
                CashAdvance.advance_date <= period_end,
            )
            .order_by(CashAdvance.advance_date.desc(), CashAdvance.cash_advance_id.desc())
        )
        deductions = await self.session.execute(
            select(Deduction)
            .where(
                Deduction.company_id == company_id,
                Deduction.driver_id == driver_id,
                Deduction.deduction_date >= period_start,
                Deduction.deduction_date <= period_end,
            )
            .order_by(Deduction.deduction_date.desc(), Deduction.deduction_id.desc())
        )

        return DriverActivity(
            trips=[trip_record(t) for t in trips.scalars().all()],
            expenses=[expense_record(e) for e in expenses.scalars().all()],
            cash_advances=[cash_advance_record(a) for a in advances.scalars().all()],
            deductions=[deduction_record(d) for d in deductions.scalars().all()],
        )

    def resolve_tax_percent(
        self, driver: Driver, tax_percent: Decimal | int | float | None = None
    ) -> Decimal:
        """Pick the withholding percent: explicit, then driver, then default."""
        if tax_percent is not None:
            return to_decimal(tax_percent)
        if driver.tax_withholding_percent is not None:
            return driver.tax_withholding_percent
        return self.settings.default_tax_withholding_percent

    async def generate_statement(
        self,
        company_id: int,
        driver_id: int,
        period_start: date,
        period_end: date,
        tax_percent: Decimal | int | float | None = None,
        trip_details: str | None = None,
    ) -> PayStatementData:
        """Generate a draft statement for a driver and period (not persisted)."""
        if period_start > period_end:
            raise InvalidPeriodError(period_start, period_end)

        driver = await self.get_driver(company_id, driver_id)
        activity = await self.fetch_driver_activity(
            company_id, driver_id, period_start, period_end
        )
        percent = self.resolve_tax_percent(driver, tax_percent)

        statement = PayStatementAggregator.generate(
            company_id=company_id,
            driver_id=driver_id,
            driver_name=driver.name,
            period_start=period_start,
            period_end=period_end,
            trips=activity.trips,
            expenses=activity.expenses,
            cash_advances=activity.cash_advances,
            deductions=activity.deductions,
            tax_percent=percent,
            trip_details=trip_details,
        )
        logger.info(
            "Generated pay statement for driver %s (%s to %s): gross=%s net=%s",
            driver_id,
            period_start,
            period_end,
            statement.gross_pay,
            statement.net_pay,
        )
        return statement

    async def save_statement(
        self, statement: PayStatementData
    ) -> tuple[PayStatement, list[StatementItemCandidate]]:
        """Persist a statement and its items. Totals are stored at cents."""
        items = StatementItemBuilder.build_items(statement)
        sign_errors = StatementItemBuilder.validate_item_signs(items)
        for error in sign_errors:
            logger.warning("Pay statement for driver %s: %s", statement.driver_id, error)

        row = PayStatement(
            company_id=statement.company_id,
            driver_id=statement.driver_id,
            driver_name=statement.driver_name,
            period_start=statement.period_start,
            period_end=statement.period_end,
            trip_total=round_to_cents(statement.trip_total),
            expense_total=round_to_cents(statement.expense_total),
            cash_advance_total=round_to_cents(statement.cash_advance_total),
            gross_pay=round_to_cents(statement.gross_pay),
            tax_withholding=round_to_cents(statement.tax_withholding),
            deductions_total=round_to_cents(statement.deductions_total),
            net_pay=round_to_cents(statement.net_pay),
            generated_date=statement.generated_date,
            status=statement.status,
            trip_details=statement.trip_details,
        )
        row.items = [
            PayStatementItem(
                item_type=item.item_type.value,
                reference_id=item.reference_id,
                description=item.description,
                amount=item.amount,
            )
            for item in items
        ]
        self.session.add(row)
        await self.session.flush()

        statement.id = row.pay_statement_id
        logger.info(
            "Saved pay statement %s for driver %s with %d items",
            row.pay_statement_id,
            statement.driver_id,
            len(items),
        )
        return row, items

    async def create_statement(
        self,
        company_id: int,
        driver_id: int,
        period_start: date,
        period_end: date,
        tax_percent: Decimal | int | float | None = None,
        trip_details: str | None = None,
    ) -> tuple[PayStatementData, list[StatementItemCandidate]]:
        """Generate and persist a statement in one step."""
        statement = await self.generate_statement(
            company_id,
            driver_id,
            period_start,
            period_end,
            tax_percent=tax_percent,
            trip_details=trip_details,
        )
        _, items = await self.save_statement(statement)
        return statement, items

    async def get_statement(self, company_id: int, pay_statement_id: int) -> PayStatement:
        """Load a saved statement row with its items."""
        result = await self.session.execute(
            select(PayStatement)
            .where(PayStatement.pay_statement_id == pay_statement_id)
            .options(selectinload(PayStatement.items))
        )
        row = result.scalar_one_or_none()
        if row is None or row.company_id != company_id:
            raise StatementNotFoundError(company_id, pay_statement_id)
        return row

    async def list_statements(
        self,
        company_id: int,
        driver_id: int | None = None,
        status: str | None = None,
    ) -> list[PayStatement]:
        """List saved statements for a company, newest period first."""
        query = select(PayStatement).where(PayStatement.company_id == company_id)
        if driver_id is not None:
            query = query.where(PayStatement.driver_id == driver_id)
        if status:
            query = query.where(PayStatement.status == status)
        query = query.order_by(
            PayStatement.period_end.desc(), PayStatement.pay_statement_id.desc()
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def load_statement(
        self, company_id: int, pay_statement_id: int
    ) -> PayStatementData:
        """Rebuild a saved statement with the records its items reference."""
        row = await self.get_statement(company_id, pay_statement_id)
        return await self.statement_from_row(row)

    async def statement_from_row(self, row: PayStatement) -> PayStatementData:
        """Rebuild statement data from an already loaded row."""
        refs: dict[str, list[int]] = {t.value: [] for t in ItemType}
        for item in row.items:
            if item.reference_id is not None:
                refs[item.item_type].append(item.reference_id)

        trips = await self._load_by_ids(Trip, Trip.trip_id, refs[ItemType.TRIP.value])
        expenses = await self._load_by_ids(
            Expense, Expense.expense_id, refs[ItemType.EXPENSE.value]
        )
        advances = await self._load_by_ids(
            CashAdvance, CashAdvance.cash_advance_id, refs[ItemType.CASH_ADVANCE.value]
        )
        deductions = await self._load_by_ids(
            Deduction, Deduction.deduction_id, refs[ItemType.DEDUCTION.value]
        )

        return PayStatementData(
            id=row.pay_statement_id,
            company_id=row.company_id,
            driver_id=row.driver_id,
            driver_name=row.driver_name,
            period_start=row.period_start,
            period_end=row.period_end,
            trips=[trip_record(t) for t in trips],
            expenses=[expense_record(e) for e in expenses],
            cash_advances=[cash_advance_record(a) for a in advances],
            deductions=[deduction_record(d) for d in deductions],
            trip_total=row.trip_total,
            expense_total=row.expense_total,
            cash_advance_total=row.cash_advance_total,
            gross_pay=row.gross_pay,
            tax_withholding=row.tax_withholding,
            deductions_total=row.deductions_total,
            net_pay=row.net_pay,
            generated_date=row.generated_date,
            status=row.status,
            trip_details=row.trip_details,
        )

    async def transition_status(
        self, company_id: int, pay_statement_id: int, to_status: str
    ) -> PayStatement:
        """Move a statement to a new status.

        Raises InvalidTransitionError if the transition is not allowed.
        """
        row = await self.get_statement(company_id, pay_statement_id)
        return await self.change_status(row, to_status)

    async def change_status(self, row: PayStatement, to_status: str) -> PayStatement:
        """Move an already loaded statement row to a new status."""
        from_status = row.status
        PayStatementStateMachine.validate_transition(from_status, to_status)

        row.status = to_status
        await self.session.flush()
        logger.info(
            "Pay statement %s status changed: %s -> %s",
            row.pay_statement_id,
            from_status,
            to_status,
        )
        return row

    async def delete_statement(self, company_id: int, pay_statement_id: int) -> None:
        """Delete a draft statement and its items."""
        row = await self.get_statement(company_id, pay_statement_id)
        if not PayStatementStateMachine.is_editable(row.status):
            raise StatementLockedError(pay_statement_id, row.status)
        await self.session.delete(row)
        await self.session.flush()
        logger.info("Deleted draft pay statement %s", pay_statement_id)

    async def _load_by_ids(self, model: Any, id_column: Any, ids: list[int]) -> list[Any]:
        if not ids:
            return []
        result = await self.session.execute(select(model).where(id_column.in_(ids)))
        by_id = {getattr(r, id_column.key): r for r in result.scalars().all()}
        return [by_id[i] for i in ids if i in by_id]

