"""Trip service - trip CRUD with pricing and trip statistics."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from driver_payroll.calculators.trip_pricing import calculate_trip_amount
from driver_payroll.calculators.types import TripStats
from driver_payroll.models import Driver, Trip
from driver_payroll.services.errors import DriverNotFoundError, TripNotFoundError

logger = logging.getLogger(__name__)

# Fields whose change requires re-pricing the trip
PRICING_FIELDS = ("distance", "rate", "rate_type", "hours_worked")


class TripService:
    """Creates and updates trips, keeping ``amount`` in step with its pricing inputs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_trip(
        self,
        company_id: int,
        driver_id: int,
        trip_date: date,
        origin: str,
        destination: str,
        distance: Decimal,
        rate: Decimal,
        rate_type: str,
        hours_worked: Decimal | None = None,
        load_id: int | None = None,
        status: str = "pending",
    ) -> Trip:
        """Create a trip, pricing it from its rate type."""
        driver = await self.session.get(Driver, driver_id)
        if driver is None or driver.company_id != company_id:
            raise DriverNotFoundError(company_id, driver_id)

        trip = Trip(
            company_id=company_id,
            driver_id=driver_id,
            load_id=load_id,
            trip_date=trip_date,
            origin=origin,
            destination=destination,
            distance=distance,
            rate=rate,
            rate_type=rate_type,
            hours_worked=hours_worked,
            amount=calculate_trip_amount(distance, rate, rate_type, hours_worked),
            status=status,
        )
        self.session.add(trip)
        await self.session.flush()
        logger.info(
            "Created trip %s for driver %s: %s %s @ %s = %s",
            trip.trip_id,
            driver_id,
            rate_type,
            distance,
            rate,
            trip.amount,
        )
        return trip

    async def get_trip(self, company_id: int, trip_id: int) -> Trip:
        trip = await self.session.get(Trip, trip_id)
        if trip is None or trip.company_id != company_id:
            raise TripNotFoundError(company_id, trip_id)
        return trip

    async def update_trip(
        self, company_id: int, trip_id: int, changes: dict[str, Any]
    ) -> Trip:
        """Apply field changes; re-price only when a pricing input changed."""
        trip = await self.get_trip(company_id, trip_id)

        if "driver_id" in changes and changes["driver_id"] != trip.driver_id:
            driver = await self.session.get(Driver, changes["driver_id"])
            if driver is None or driver.company_id != company_id:
                raise DriverNotFoundError(company_id, changes["driver_id"])

        repriced = False
        for name, value in changes.items():
            if getattr(trip, name) != value:
                setattr(trip, name, value)
                repriced = repriced or name in PRICING_FIELDS

        if repriced:
            old_amount = trip.amount
            trip.amount = calculate_trip_amount(
                trip.distance, trip.rate, trip.rate_type, trip.hours_worked
            )
            logger.info("Re-priced trip %s: %s -> %s", trip_id, old_amount, trip.amount)

        await self.session.flush()
        return trip

    async def list_trips(
        self,
        company_id: int,
        driver_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Trip]:
        """List trips for a company, newest first."""
        query = select(Trip).where(Trip.company_id == company_id)
        if driver_id is not None:
            query = query.where(Trip.driver_id == driver_id)
        if start is not None:
            query = query.where(Trip.trip_date >= start)
        if end is not None:
            query = query.where(Trip.trip_date <= end)
        query = query.order_by(Trip.trip_date.desc(), Trip.trip_id.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_trip(self, company_id: int, trip_id: int) -> None:
        trip = await self.get_trip(company_id, trip_id)
        await self.session.delete(trip)
        await self.session.flush()

    async def driver_trip_stats(self, company_id: int, driver_id: int) -> TripStats:
        """Trip count, miles, earnings and average rate per mile for a driver."""
        result = await self.session.execute(
            select(
                func.count(Trip.trip_id),
                func.coalesce(func.sum(Trip.distance), 0),
                func.coalesce(func.sum(Trip.amount), 0),
            ).where(Trip.company_id == company_id, Trip.driver_id == driver_id)
        )
        count, miles, earnings = result.one()
        miles = Decimal(str(miles))
        earnings = Decimal(str(earnings))

        return TripStats(
            total_trips=count,
            total_miles=miles,
            total_earnings=earnings,
            average_rate=earnings / miles if miles > 0 else Decimal("0"),
        )

    async def company_trip_stats(self, company_id: int) -> TripStats:
        """Trip count, miles, earnings and distinct drivers for a company."""
        result = await self.session.execute(
            select(
                func.count(Trip.trip_id),
                func.coalesce(func.sum(Trip.distance), 0),
                func.coalesce(func.sum(Trip.amount), 0),
                func.count(func.distinct(Trip.driver_id)),
            ).where(Trip.company_id == company_id)
        )
        count, miles, earnings, drivers = result.one()

        return TripStats(
            total_trips=count,
            total_miles=Decimal(str(miles)),
            total_earnings=Decimal(str(earnings)),
            unique_drivers=drivers,
        )
