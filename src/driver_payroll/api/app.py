"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from driver_payroll import __version__
from driver_payroll.api.routes import (
    cash_advances_router,
    deductions_router,
    drivers_router,
    expenses_router,
    health_router,
    pay_statements_router,
    trips_router,
)
from driver_payroll.config import get_settings
from driver_payroll.database import create_tables, dispose_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    await create_tables()
    logger.info("Driver payroll API started")
    yield
    await dispose_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Driver Payroll API",
        description="Driver pay statements for fleet payroll",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    app.include_router(health_router)
    app.include_router(trips_router, prefix="/api/v1")
    app.include_router(drivers_router, prefix="/api/v1")
    app.include_router(expenses_router, prefix="/api/v1")
    app.include_router(cash_advances_router, prefix="/api/v1")
    app.include_router(deductions_router, prefix="/api/v1")
    app.include_router(pay_statements_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
