"""Expense API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from driver_payroll.api.dependencies import CompanyId, DbSession
from driver_payroll.api.schemas import (
    ErrorResponse,
    ExpenseCategory,
    ExpenseCategoryTotalResponse,
    ExpenseCreate,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseUpdate,
)
from driver_payroll.services.errors import DriverNotFoundError, ExpenseNotFoundError
from driver_payroll.services.expense_service import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_expense(
    db: DbSession,
    company_id: CompanyId,
    payload: ExpenseCreate,
) -> ExpenseResponse:
    """Record an expense for a driver."""
    try:
        expense = await ExpenseService(db).create_expense(
            company_id=company_id,
            driver_id=payload.driver_id,
            expense_date=payload.expense_date,
            category=payload.category,
            amount=payload.amount,
            description=payload.description,
            reimbursable=payload.reimbursable,
            reimbursement_status=payload.reimbursement_status,
        )
    except DriverNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return ExpenseResponse.model_validate(expense)


@router.get(
    "",
    response_model=ExpenseListResponse,
)
async def list_expenses(
    db: DbSession,
    company_id: CompanyId,
    driver_id: int | None = None,
    category: ExpenseCategory | None = None,
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> ExpenseListResponse:
    """List expenses with optional driver, category and date filters."""
    expenses = await ExpenseService(db).list_expenses(
        company_id, driver_id=driver_id, category=category, start=start, end=end
    )
    return ExpenseListResponse(
        items=[ExpenseResponse.model_validate(e) for e in expenses],
        total=len(expenses),
    )


@router.get(
    "/summary/by-category",
    response_model=list[ExpenseCategoryTotalResponse],
)
async def expense_summary_by_category(
    db: DbSession,
    company_id: CompanyId,
    driver_id: int | None = None,
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> list[ExpenseCategoryTotalResponse]:
    """Expense count and total per category."""
    summary = await ExpenseService(db).summary_by_category(
        company_id, driver_id=driver_id, start=start, end=end
    )
    return [ExpenseCategoryTotalResponse.model_validate(s) for s in summary]


@router.get(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_expense(
    db: DbSession,
    company_id: CompanyId,
    expense_id: Annotated[int, Path()],
) -> ExpenseResponse:
    try:
        expense = await ExpenseService(db).get_expense(company_id, expense_id)
    except ExpenseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ExpenseResponse.model_validate(expense)


@router.patch(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_expense(
    db: DbSession,
    company_id: CompanyId,
    expense_id: Annotated[int, Path()],
    payload: ExpenseUpdate,
) -> ExpenseResponse:
    try:
        expense = await ExpenseService(db).update_expense(
            company_id, expense_id, payload.changes()
        )
    except (ExpenseNotFoundError, DriverNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return ExpenseResponse.model_validate(expense)


@router.delete(
    "/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_expense(
    db: DbSession,
    company_id: CompanyId,
    expense_id: Annotated[int, Path()],
) -> Response:
    try:
        await ExpenseService(db).delete_expense(company_id, expense_id)
    except ExpenseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
