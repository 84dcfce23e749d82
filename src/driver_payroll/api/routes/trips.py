"""Trip API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from driver_payroll.api.dependencies import CompanyId, DbSession
from driver_payroll.api.schemas import (
    ErrorResponse,
    TripCreate,
    TripListResponse,
    TripResponse,
    TripStatsResponse,
    TripUpdate,
)
from driver_payroll.services.errors import DriverNotFoundError, TripNotFoundError
from driver_payroll.services.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["trips"])
drivers_router = APIRouter(prefix="/drivers", tags=["drivers"])


# ============================================================================
# Trip CRUD
# ============================================================================


@router.post(
    "",
    response_model=TripResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_trip(
    db: DbSession,
    company_id: CompanyId,
    payload: TripCreate,
) -> TripResponse:
    """Create a trip; its amount is priced from the rate type."""
    service = TripService(db)
    try:
        trip = await service.create_trip(
            company_id=company_id,
            driver_id=payload.driver_id,
            trip_date=payload.trip_date,
            origin=payload.origin,
            destination=payload.destination,
            distance=payload.distance,
            rate=payload.rate,
            rate_type=payload.rate_type.value,
            hours_worked=payload.hours_worked,
            load_id=payload.load_id,
            status=payload.status,
        )
    except DriverNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return TripResponse.model_validate(trip)


@router.get(
    "",
    response_model=TripListResponse,
)
async def list_trips(
    db: DbSession,
    company_id: CompanyId,
    driver_id: int | None = None,
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> TripListResponse:
    """List trips for a company with optional driver and date filters."""
    trips = await TripService(db).list_trips(
        company_id, driver_id=driver_id, start=start, end=end
    )
    return TripListResponse(
        items=[TripResponse.model_validate(t) for t in trips],
        total=len(trips),
    )


@router.get(
    "/stats",
    response_model=TripStatsResponse,
)
async def company_trip_stats(
    db: DbSession,
    company_id: CompanyId,
) -> TripStatsResponse:
    """Trip totals across all drivers of the company."""
    stats = await TripService(db).company_trip_stats(company_id)
    return TripStatsResponse.model_validate(stats)


@router.get(
    "/{trip_id}",
    response_model=TripResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_trip(
    db: DbSession,
    company_id: CompanyId,
    trip_id: Annotated[int, Path()],
) -> TripResponse:
    """Get a trip by ID."""
    try:
        trip = await TripService(db).get_trip(company_id, trip_id)
    except TripNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TripResponse.model_validate(trip)


@router.patch(
    "/{trip_id}",
    response_model=TripResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_trip(
    db: DbSession,
    company_id: CompanyId,
    trip_id: Annotated[int, Path()],
    payload: TripUpdate,
) -> TripResponse:
    """Update a trip. Changing distance, rate, rate type or hours re-prices it."""
    service = TripService(db)
    try:
        trip = await service.update_trip(company_id, trip_id, payload.changes())
    except (TripNotFoundError, DriverNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return TripResponse.model_validate(trip)


@router.delete(
    "/{trip_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_trip(
    db: DbSession,
    company_id: CompanyId,
    trip_id: Annotated[int, Path()],
) -> Response:
    """Delete a trip."""
    try:
        await TripService(db).delete_trip(company_id, trip_id)
    except TripNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Driver trip statistics
# ============================================================================


@drivers_router.get(
    "/{driver_id}/trip-stats",
    response_model=TripStatsResponse,
)
async def driver_trip_stats(
    db: DbSession,
    company_id: CompanyId,
    driver_id: Annotated[int, Path()],
) -> TripStatsResponse:
    """Trip count, miles, earnings and average rate per mile for one driver."""
    stats = await TripService(db).driver_trip_stats(company_id, driver_id)
    return TripStatsResponse.model_validate(stats)
