"""Deduction service."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from driver_payroll.models import Deduction, Driver
from driver_payroll.services.errors import DeductionNotFoundError, DriverNotFoundError

logger = logging.getLogger(__name__)


class DeductionService:
    """Records deductions (insurance, retirement, ...) taken from driver pay."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_deduction(
        self,
        company_id: int,
        driver_id: int,
        deduction_date: date,
        deduction_type: str,
        amount: Decimal,
        description: str = "",
    ) -> Deduction:
        driver = await self.session.get(Driver, driver_id)
        if driver is None or driver.company_id != company_id:
            raise DriverNotFoundError(company_id, driver_id)

        deduction = Deduction(
            company_id=company_id,
            driver_id=driver_id,
            deduction_date=deduction_date,
            deduction_type=deduction_type,
            amount=amount,
            description=description,
        )
        self.session.add(deduction)
        await self.session.flush()
        logger.info(
            "Created %s deduction %s for driver %s: %s",
            deduction_type,
            deduction.deduction_id,
            driver_id,
            amount,
        )
        return deduction

    async def get_deduction(self, company_id: int, deduction_id: int) -> Deduction:
        deduction = await self.session.get(Deduction, deduction_id)
        if deduction is None or deduction.company_id != company_id:
            raise DeductionNotFoundError(company_id, deduction_id)
        return deduction

    async def list_deductions(
        self,
        company_id: int,
        driver_id: int | None = None,
        deduction_type: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Deduction]:
        """List deductions for a company, newest first."""
        query = select(Deduction).where(Deduction.company_id == company_id)
        if driver_id is not None:
            query = query.where(Deduction.driver_id == driver_id)
        if deduction_type:
            query = query.where(Deduction.deduction_type == deduction_type)
        if start is not None:
            query = query.where(Deduction.deduction_date >= start)
        if end is not None:
            query = query.where(Deduction.deduction_date <= end)
        query = query.order_by(Deduction.deduction_date.desc(), Deduction.deduction_id.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_deduction(self, company_id: int, deduction_id: int) -> None:
        deduction = await self.get_deduction(company_id, deduction_id)
        await self.session.delete(deduction)
        await self.session.flush()
