"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from intake_engine.config import Settings
from intake_engine.infrastructure.database import get_db
from intake_engine.infrastructure.telemetry import get_logger
from intake_engine.presentation.http.dependencies import get_app_settings

logger = get_logger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str
    environment: str
    checks: dict[str, Any]


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    checks: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """Service status and which optional collaborators are configured.

    Dependencies are not contacted; use /ready for that.
    """
    state = request.app.state
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=settings.version,
        environment=settings.environment,
        checks={
            "rubric_grader": getattr(state, "rubric_grader", None) is not None,
            "code_runner": getattr(state, "code_runner", None) is not None,
        },
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> ReadinessResponse:
    """Verifies the database answers a trivial query."""
    checks: dict[str, bool] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as e:
        logger.warning("Database readiness check failed", extra={"error": str(e)})
        checks["database"] = False

    return ReadinessResponse(ready=all(checks.values()), checks=checks)


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe endpoint."""
    return {"status": "alive"}
