"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the supervisor reports unhealthy
      or the database is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from user_service.api.deps import get_connection_supervisor, get_db_manager
from user_service.infrastructure.connection_supervisor import ConnectionSupervisor
from user_service.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "user-service",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    db_manager: DatabaseSessionManager | None = Depends(get_db_manager),
    supervisor: ConnectionSupervisor | None = Depends(get_connection_supervisor),
):
    """Readiness probe: supervisor state plus live database connectivity."""
    if supervisor is not None and not supervisor.is_healthy:
        return _not_ready(f"connection_{supervisor.state.value}")
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return _not_ready("database_unavailable")
    return {
        "status": "ready",
        "checks": {
            "database": "healthy",
            "connection": supervisor.state.value if supervisor else "unsupervised",
        },
    }


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
