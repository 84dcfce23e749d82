"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from driver_payroll.api.dependencies import DbSession
from driver_payroll.models import Base

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    database: str


class ReadinessResponse(BaseModel):
    """Readiness response listing payroll tables not yet created."""

    status: str
    missing_tables: list[str] = []


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(db: DbSession) -> HealthResponse:
    """Check API and database health."""
    db_status = "unhealthy"
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        database=db_status,
    )


def _missing_tables(session: Session) -> list[str]:
    existing = set(inspect(session.connection()).get_table_names())
    return sorted(set(Base.metadata.tables) - existing)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(db: DbSession, response: Response) -> ReadinessResponse:
    """Ready once every payroll table exists in the database."""
    try:
        missing = await db.run_sync(_missing_tables)
    except SQLAlchemyError:
        logger.warning("Readiness check could not inspect the schema", exc_info=True)
        missing = sorted(Base.metadata.tables)

    if missing:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="not_ready", missing_tables=missing)
    return ReadinessResponse(status="ready")


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
