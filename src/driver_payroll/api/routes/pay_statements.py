"""Pay statement API endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from driver_payroll.api.dependencies import CompanyId, DbSession
from driver_payroll.api.schemas import (
    ErrorResponse,
    PayStatementListResponse,
    PayStatementRequest,
    PayStatementResponse,
    PayStatementSummary,
    StatementItemResponse,
    StatusTransitionRequest,
    StatusTransitionResponse,
)
from driver_payroll.calculators.line_builder import StatementItemBuilder
from driver_payroll.calculators.types import StatementStatus
from driver_payroll.reports import render_pay_statement_pdf
from driver_payroll.services.errors import (
    DriverNotFoundError,
    InvalidPeriodError,
    StatementLockedError,
    StatementNotFoundError,
)
from driver_payroll.services.pay_statement_service import PayStatementService
from driver_payroll.services.state_machine import (
    InvalidTransitionError,
    PayStatementStateMachine,
)

router = APIRouter(prefix="/pay-statements", tags=["pay-statements"])


# ============================================================================
# Generation
# ============================================================================


@router.post(
    "/preview",
    response_model=PayStatementResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def preview_pay_statement(
    db: DbSession,
    company_id: CompanyId,
    payload: PayStatementRequest,
) -> PayStatementResponse:
    """Compute a pay statement for a driver and period without saving it."""
    service = PayStatementService(db)
    try:
        statement = await service.generate_statement(
            company_id,
            payload.driver_id,
            payload.period_start,
            payload.period_end,
            tax_percent=payload.tax_withholding_percent,
            trip_details=payload.trip_details,
        )
    except DriverNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidPeriodError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    response = PayStatementResponse.model_validate(statement)
    response.items = [
        StatementItemResponse.model_validate(item)
        for item in StatementItemBuilder.build_items(statement)
    ]
    return response


@router.post(
    "",
    response_model=PayStatementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_pay_statement(
    db: DbSession,
    company_id: CompanyId,
    payload: PayStatementRequest,
) -> PayStatementResponse:
    """Generate a pay statement and save it as a draft."""
    service = PayStatementService(db)
    try:
        statement, items = await service.create_statement(
            company_id,
            payload.driver_id,
            payload.period_start,
            payload.period_end,
            tax_percent=payload.tax_withholding_percent,
            trip_details=payload.trip_details,
        )
    except DriverNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidPeriodError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    await db.commit()

    response = PayStatementResponse.model_validate(statement)
    response.items = [StatementItemResponse.model_validate(item) for item in items]
    return response


# ============================================================================
# Saved statements
# ============================================================================


@router.get(
    "",
    response_model=PayStatementListResponse,
)
async def list_pay_statements(
    db: DbSession,
    company_id: CompanyId,
    driver_id: int | None = None,
    status_filter: Annotated[StatementStatus | None, Query(alias="status")] = None,
) -> PayStatementListResponse:
    """List saved pay statements, newest period first."""
    rows = await PayStatementService(db).list_statements(
        company_id,
        driver_id=driver_id,
        status=status_filter.value if status_filter else None,
    )
    return PayStatementListResponse(
        items=[PayStatementSummary.model_validate(r) for r in rows],
        total=len(rows),
    )


@router.get(
    "/{pay_statement_id}",
    response_model=PayStatementResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_pay_statement(
    db: DbSession,
    company_id: CompanyId,
    pay_statement_id: Annotated[int, Path()],
) -> PayStatementResponse:
    """Get a saved pay statement with its records and items."""
    service = PayStatementService(db)
    try:
        row = await service.get_statement(company_id, pay_statement_id)
    except StatementNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    statement = await service.statement_from_row(row)
    response = PayStatementResponse.model_validate(statement)
    response.items = [StatementItemResponse.model_validate(item) for item in row.items]
    return response


@router.get(
    "/{pay_statement_id}/pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        404: {"model": ErrorResponse},
    },
)
async def get_pay_statement_pdf(
    db: DbSession,
    company_id: CompanyId,
    pay_statement_id: Annotated[int, Path()],
) -> Response:
    """Render a saved pay statement as a PDF document."""
    service = PayStatementService(db)
    try:
        statement = await service.load_statement(company_id, pay_statement_id)
    except StatementNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    content = render_pay_statement_pdf(statement, service.settings.company_name)
    filename = f"pay-statement-{pay_statement_id}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/{pay_statement_id}/status",
    response_model=StatusTransitionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def transition_pay_statement(
    db: DbSession,
    company_id: CompanyId,
    pay_statement_id: Annotated[int, Path()],
    payload: StatusTransitionRequest,
) -> StatusTransitionResponse:
    """Finalize, reopen or mark a pay statement as paid."""
    service = PayStatementService(db)
    try:
        row = await service.get_statement(company_id, pay_statement_id)
        from_status = row.status
        row = await service.change_status(row, payload.status.value)
    except StatementNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    await db.commit()

    return StatusTransitionResponse(
        pay_statement_id=row.pay_statement_id,
        from_status=from_status,
        status=row.status,
        next_statuses=PayStatementStateMachine.get_next_statuses(row.status),
    )


@router.delete(
    "/{pay_statement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_pay_statement(
    db: DbSession,
    company_id: CompanyId,
    pay_statement_id: Annotated[int, Path()],
) -> Response:
    """Delete a draft pay statement."""
    try:
        await PayStatementService(db).delete_statement(company_id, pay_statement_id)
    except StatementNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StatementLockedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
