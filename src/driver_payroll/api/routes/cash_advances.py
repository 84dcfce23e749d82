"""Cash advance API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from driver_payroll.api.dependencies import CompanyId, DbSession
from driver_payroll.api.schemas import (
    CashAdvanceCreate,
    CashAdvanceListResponse,
    CashAdvanceResponse,
    CashAdvanceStatus,
    CashAdvanceStatusUpdate,
    ErrorResponse,
)
from driver_payroll.services.cash_advance_service import CashAdvanceService
from driver_payroll.services.errors import CashAdvanceNotFoundError, DriverNotFoundError

router = APIRouter(prefix="/cash-advances", tags=["cash-advances"])


@router.post(
    "",
    response_model=CashAdvanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_cash_advance(
    db: DbSession,
    company_id: CompanyId,
    payload: CashAdvanceCreate,
) -> CashAdvanceResponse:
    """Record cash advanced to a driver."""
    try:
        advance = await CashAdvanceService(db).create_cash_advance(
            company_id=company_id,
            driver_id=payload.driver_id,
            advance_date=payload.advance_date,
            amount=payload.amount,
            description=payload.description,
            status=payload.status,
        )
    except DriverNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return CashAdvanceResponse.model_validate(advance)


@router.get(
    "",
    response_model=CashAdvanceListResponse,
)
async def list_cash_advances(
    db: DbSession,
    company_id: CompanyId,
    driver_id: int | None = None,
    status_filter: Annotated[CashAdvanceStatus | None, Query(alias="status")] = None,
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> CashAdvanceListResponse:
    advances = await CashAdvanceService(db).list_cash_advances(
        company_id, driver_id=driver_id, status=status_filter, start=start, end=end
    )
    return CashAdvanceListResponse(
        items=[CashAdvanceResponse.model_validate(a) for a in advances],
        total=len(advances),
    )


@router.get(
    "/{cash_advance_id}",
    response_model=CashAdvanceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_cash_advance(
    db: DbSession,
    company_id: CompanyId,
    cash_advance_id: Annotated[int, Path()],
) -> CashAdvanceResponse:
    try:
        advance = await CashAdvanceService(db).get_cash_advance(company_id, cash_advance_id)
    except CashAdvanceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CashAdvanceResponse.model_validate(advance)


@router.post(
    "/{cash_advance_id}/status",
    response_model=CashAdvanceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def set_cash_advance_status(
    db: DbSession,
    company_id: CompanyId,
    cash_advance_id: Annotated[int, Path()],
    payload: CashAdvanceStatusUpdate,
) -> CashAdvanceResponse:
    """Approve, reject or mark a cash advance as paid."""
    try:
        advance = await CashAdvanceService(db).set_status(
            company_id, cash_advance_id, payload.status
        )
    except CashAdvanceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return CashAdvanceResponse.model_validate(advance)


@router.delete(
    "/{cash_advance_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_cash_advance(
    db: DbSession,
    company_id: CompanyId,
    cash_advance_id: Annotated[int, Path()],
) -> Response:
    try:
        await CashAdvanceService(db).delete_cash_advance(company_id, cash_advance_id)
    except CashAdvanceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
