"""Expense service - expense CRUD and per-category totals."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from driver_payroll.calculators.types import ExpenseCategoryTotal
from driver_payroll.models import Driver, Expense
from driver_payroll.services.errors import DriverNotFoundError, ExpenseNotFoundError

logger = logging.getLogger(__name__)


class ExpenseService:
    """Records driver expenses that later reduce net pay."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _check_driver(self, company_id: int, driver_id: int) -> None:
        driver = await self.session.get(Driver, driver_id)
        if driver is None or driver.company_id != company_id:
            raise DriverNotFoundError(company_id, driver_id)

    async def create_expense(
        self,
        company_id: int,
        driver_id: int,
        expense_date: date,
        category: str,
        amount: Decimal,
        description: str = "",
        reimbursable: bool = False,
        reimbursement_status: str | None = None,
    ) -> Expense:
        await self._check_driver(company_id, driver_id)

        expense = Expense(
            company_id=company_id,
            driver_id=driver_id,
            expense_date=expense_date,
            category=category,
            amount=amount,
            description=description,
            reimbursable=reimbursable,
            reimbursement_status=reimbursement_status,
        )
        self.session.add(expense)
        await self.session.flush()
        logger.info(
            "Created expense %s for driver %s: %s %s",
            expense.expense_id,
            driver_id,
            category,
            amount,
        )
        return expense

    async def get_expense(self, company_id: int, expense_id: int) -> Expense:
        expense = await self.session.get(Expense, expense_id)
        if expense is None or expense.company_id != company_id:
            raise ExpenseNotFoundError(company_id, expense_id)
        return expense

    async def update_expense(
        self, company_id: int, expense_id: int, changes: dict[str, Any]
    ) -> Expense:
        """Apply field changes to an expense."""
        expense = await self.get_expense(company_id, expense_id)

        if "driver_id" in changes and changes["driver_id"] != expense.driver_id:
            await self._check_driver(company_id, changes["driver_id"])

        for name, value in changes.items():
            setattr(expense, name, value)

        await self.session.flush()
        return expense

    async def list_expenses(
        self,
        company_id: int,
        driver_id: int | None = None,
        category: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Expense]:
        """List expenses for a company, newest first."""
        query = select(Expense).where(Expense.company_id == company_id)
        if driver_id is not None:
            query = query.where(Expense.driver_id == driver_id)
        if category:
            query = query.where(Expense.category == category)
        if start is not None:
            query = query.where(Expense.expense_date >= start)
        if end is not None:
            query = query.where(Expense.expense_date <= end)
        query = query.order_by(Expense.expense_date.desc(), Expense.expense_id.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_expense(self, company_id: int, expense_id: int) -> None:
        expense = await self.get_expense(company_id, expense_id)
        await self.session.delete(expense)
        await self.session.flush()
        logger.info("Deleted expense %s", expense_id)

    async def summary_by_category(
        self,
        company_id: int,
        driver_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[ExpenseCategoryTotal]:
        """Expense count and total per category, largest total first."""
        total = func.coalesce(func.sum(Expense.amount), 0)
        query = (
            select(Expense.category, func.count(Expense.expense_id), total)
            .where(Expense.company_id == company_id)
            .group_by(Expense.category)
        )
        if driver_id is not None:
            query = query.where(Expense.driver_id == driver_id)
        if start is not None:
            query = query.where(Expense.expense_date >= start)
        if end is not None:
            query = query.where(Expense.expense_date <= end)
        result = await self.session.execute(query)

        summary = [
            ExpenseCategoryTotal(
                category=category,
                expense_count=count,
                total_amount=Decimal(str(amount)),
            )
            for category, count, amount in result.all()
        ]
        summary.sort(key=lambda s: (-s.total_amount, s.category))
        return summary
