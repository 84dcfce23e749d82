"""Conversion from ORM rows to calculation records."""

from __future__ import annotations

from driver_payroll.calculators.types import (
    CashAdvanceRecord,
    DeductionRecord,
    ExpenseRecord,
    TripRecord,
)
from driver_payroll.models import CashAdvance, Deduction, Expense, Trip


def trip_record(trip: Trip) -> TripRecord:
    return TripRecord(
        id=trip.trip_id,
        company_id=trip.company_id,
        driver_id=trip.driver_id,
        load_id=trip.load_id,
        trip_date=trip.trip_date,
        origin=trip.origin,
        destination=trip.destination,
        distance=trip.distance,
        rate=trip.rate,
        rate_type=trip.rate_type,
        hours_worked=trip.hours_worked,
        amount=trip.amount,
        status=trip.status,
    )


def expense_record(expense: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense.expense_id,
        company_id=expense.company_id,
        driver_id=expense.driver_id,
        expense_date=expense.expense_date,
        category=expense.category,
        amount=expense.amount,
        description=expense.description,
        reimbursable=expense.reimbursable,
        reimbursement_status=expense.reimbursement_status,
    )


def cash_advance_record(advance: CashAdvance) -> CashAdvanceRecord:
    return CashAdvanceRecord(
        id=advance.cash_advance_id,
        company_id=advance.company_id,
        driver_id=advance.driver_id,
        advance_date=advance.advance_date,
        amount=advance.amount,
        description=advance.description,
        status=advance.status,
    )


def deduction_record(deduction: Deduction) -> DeductionRecord:
    return DeductionRecord(
        id=deduction.deduction_id,
        company_id=deduction.company_id,
        driver_id=deduction.driver_id,
        deduction_type=deduction.deduction_type,
        description=deduction.description,
        amount=deduction.amount,
        deduction_date=deduction.deduction_date,
    )
