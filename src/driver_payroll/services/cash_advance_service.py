"""Cash advance service."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from driver_payroll.models import CashAdvance, Driver
from driver_payroll.services.errors import CashAdvanceNotFoundError, DriverNotFoundError

logger = logging.getLogger(__name__)


class CashAdvanceService:
    """Records cash handed to drivers ahead of their pay statement."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_cash_advance(
        self,
        company_id: int,
        driver_id: int,
        advance_date: date,
        amount: Decimal,
        description: str = "",
        status: str = "pending",
    ) -> CashAdvance:
        driver = await self.session.get(Driver, driver_id)
        if driver is None or driver.company_id != company_id:
            raise DriverNotFoundError(company_id, driver_id)

        advance = CashAdvance(
            company_id=company_id,
            driver_id=driver_id,
            advance_date=advance_date,
            amount=amount,
            description=description,
            status=status,
        )
        self.session.add(advance)
        await self.session.flush()
        logger.info(
            "Created cash advance %s for driver %s: %s",
            advance.cash_advance_id,
            driver_id,
            amount,
        )
        return advance

    async def get_cash_advance(self, company_id: int, cash_advance_id: int) -> CashAdvance:
        advance = await self.session.get(CashAdvance, cash_advance_id)
        if advance is None or advance.company_id != company_id:
            raise CashAdvanceNotFoundError(company_id, cash_advance_id)
        return advance

    async def list_cash_advances(
        self,
        company_id: int,
        driver_id: int | None = None,
        status: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[CashAdvance]:
        """List cash advances for a company, newest first."""
        query = select(CashAdvance).where(CashAdvance.company_id == company_id)
        if driver_id is not None:
            query = query.where(CashAdvance.driver_id == driver_id)
        if status:
            query = query.where(CashAdvance.status == status)
        if start is not None:
            query = query.where(CashAdvance.advance_date >= start)
        if end is not None:
            query = query.where(CashAdvance.advance_date <= end)
        query = query.order_by(
            CashAdvance.advance_date.desc(), CashAdvance.cash_advance_id.desc()
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def set_status(
        self, company_id: int, cash_advance_id: int, status: str
    ) -> CashAdvance:
        advance = await self.get_cash_advance(company_id, cash_advance_id)
        old_status = advance.status
        advance.status = status
        await self.session.flush()
        logger.info(
            "Cash advance %s status changed: %s -> %s", cash_advance_id, old_status, status
        )
        return advance

    async def delete_cash_advance(self, company_id: int, cash_advance_id: int) -> None:
        advance = await self.get_cash_advance(company_id, cash_advance_id)
        await self.session.delete(advance)
        await self.session.flush()
