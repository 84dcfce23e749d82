"""API routes."""

from driver_payroll.api.routes.cash_advances import router as cash_advances_router
from driver_payroll.api.routes.deductions import router as deductions_router
from driver_payroll.api.routes.expenses import router as expenses_router
from driver_payroll.api.routes.health import router as health_router
from driver_payroll.api.routes.pay_statements import router as pay_statements_router
from driver_payroll.api.routes.trips import drivers_router, router as trips_router

__all__ = [
    "cash_advances_router",
    "deductions_router",
    "drivers_router",
    "expenses_router",
    "health_router",
    "pay_statements_router",
    "trips_router",
]
