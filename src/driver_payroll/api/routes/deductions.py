"""Deduction API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from driver_payroll.api.dependencies import CompanyId, DbSession
from driver_payroll.api.schemas import (
    DeductionCreate,
    DeductionListResponse,
    DeductionResponse,
    DeductionType,
    ErrorResponse,
)
from driver_payroll.services.deduction_service import DeductionService
from driver_payroll.services.errors import DeductionNotFoundError, DriverNotFoundError

router = APIRouter(prefix="/deductions", tags=["deductions"])


@router.post(
    "",
    response_model=DeductionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_deduction(
    db: DbSession,
    company_id: CompanyId,
    payload: DeductionCreate,
) -> DeductionResponse:
    """Record a deduction from a driver's pay."""
    try:
        deduction = await DeductionService(db).create_deduction(
            company_id=company_id,
            driver_id=payload.driver_id,
            deduction_date=payload.deduction_date,
            deduction_type=payload.deduction_type,
            amount=payload.amount,
            description=payload.description,
        )
    except DriverNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return DeductionResponse.model_validate(deduction)


@router.get(
    "",
    response_model=DeductionListResponse,
)
async def list_deductions(
    db: DbSession,
    company_id: CompanyId,
    driver_id: int | None = None,
    deduction_type: DeductionType | None = None,
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> DeductionListResponse:
    deductions = await DeductionService(db).list_deductions(
        company_id,
        driver_id=driver_id,
        deduction_type=deduction_type,
        start=start,
        end=end,
    )
    return DeductionListResponse(
        items=[DeductionResponse.model_validate(d) for d in deductions],
        total=len(deductions),
    )


@router.get(
    "/{deduction_id}",
    response_model=DeductionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_deduction(
    db: DbSession,
    company_id: CompanyId,
    deduction_id: Annotated[int, Path()],
) -> DeductionResponse:
    try:
        deduction = await DeductionService(db).get_deduction(company_id, deduction_id)
    except DeductionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DeductionResponse.model_validate(deduction)


@router.delete(
    "/{deduction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_deduction(
    db: DbSession,
    company_id: CompanyId,
    deduction_id: Annotated[int, Path()],
) -> Response:
    try:
        await DeductionService(db).delete_deduction(company_id, deduction_id)
    except DeductionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
