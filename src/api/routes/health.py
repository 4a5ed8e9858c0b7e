"""Health check endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

API_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


class DatabaseStatus(BaseModel):
    status: str
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: DatabaseStatus | None = None


def _response(status: str, database: DatabaseStatus | None = None) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=database,
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """Answer without touching the database; used by load balancers."""
    return _response("healthy")


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Readiness probe",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Round-trip to the database; ``degraded`` when it cannot be reached."""
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return _response("degraded", DatabaseStatus(status="unhealthy", error=type(e).__name__))

    latency_ms = round((time.perf_counter() - start) * 1000, 2)
    return _response("healthy", DatabaseStatus(status="healthy", latency_ms=latency_ms))
