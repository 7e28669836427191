"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.runtime.context import get_config

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request) -> JSONResponse:
    """Report liveness and database connectivity."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    database_ok = app_deps.database_service.health_check()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "environment": get_config().app.environment,
            "database": "ok" if database_ok else "unavailable",
        },
    )
