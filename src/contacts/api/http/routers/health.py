"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.contacts.api.http.app_data import ApplicationDependencies
from src.contacts.core.storage.session_storage import (
    RedisSessionStorage,
    get_session_storage,
)
from src.contacts.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 OK as long as the process is running."""
    return {"status": "healthy", "service": "contacts"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when the database cannot be reached.

    Session storage is reported but never fails the check, since the app
    falls back to in-memory sessions.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, Any] = {}
    all_healthy = True

    db_healthy = app_deps.database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": "sqlite" if config.database.is_sqlite else "postgresql",
    }
    if not db_healthy:
        all_healthy = False

    storage = await get_session_storage()
    checks["sessions"] = {
        "status": "healthy" if storage.is_available() else "degraded",
        "type": "redis" if isinstance(storage, RedisSessionStorage) else "in-memory",
    }

    body = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }
    if not all_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
