"""FastAPI application: middleware, routers and lifecycle."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, RedirectResponse, Response

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.http.routers.products import router as products_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config

REQUEST_ID_HEADER = "X-Request-ID"

configure_logging()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add browser hardening headers to every response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        headers = response.headers
        headers.setdefault("X-Content-Type-Options", "nosniff")
        headers.setdefault("X-Frame-Options", "DENY")
        headers.setdefault("Referrer-Policy", "same-origin")
        if get_config().app.environment == "production":
            headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response


def startup() -> None:
    """Open the database and publish shared services on ``app.state``."""
    config = get_config()
    logger.info("Starting {} ({})", config.app.name, config.app.environment)

    database_service = DbSessionService(config)
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(database_service=database_service)


def shutdown() -> None:
    logger.info("Shutting down")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(_: FastAPI):
    startup()
    try:
        yield
    finally:
        shutdown()


def _add_cors(application: FastAPI, config: ConfigData) -> None:
    cors = config.app.cors
    if config.app.environment == "production" and "*" in cors.origins:
        raise RuntimeError("Wildcard CORS origins are not allowed in production")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )


_interactive_docs = get_config().app.environment != "production"

app = FastAPI(
    title=get_config().app.name,
    lifespan=lifespan,
    docs_url="/docs" if _interactive_docs else None,
    redoc_url="/redoc" if _interactive_docs else None,
)
app.add_middleware(SecurityHeadersMiddleware)
_add_cors(app, get_config())

__all__ = ["app", "startup", "shutdown"]


def _client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _error_response(status_code: int, detail, request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "request_id": request_id},
        headers={REQUEST_ID_HEADER: request_id},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag every log line of a request with its id and log its outcome."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    started = time.perf_counter()

    def elapsed_ms() -> float:
        return round((time.perf_counter() - started) * 1000, 1)

    with logger.contextualize(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_ip=_client_ip(request),
    ):
        logger.debug("request.start")
        try:
            response = await call_next(request)
        except HTTPException as exc:
            logger.bind(status_code=exc.status_code, duration_ms=elapsed_ms()).warning(
                "request.error"
            )
            return _error_response(exc.status_code, exc.detail, request_id)
        except Exception as exc:
            logger.bind(
                status_code=500, duration_ms=elapsed_ms(), error_type=type(exc).__name__
            ).exception("request.error")
            return _error_response(500, "Internal Server Error", request_id)

        logger.bind(status_code=response.status_code, duration_ms=elapsed_ms()).info(
            "{} {} -> {}", request.method, request.url.path, response.status_code
        )
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response


app.include_router(health_router)
app.include_router(products_router)


@app.get("/", include_in_schema=False)
def home() -> RedirectResponse:
    return RedirectResponse(app.url_path_for("products.index"), status_code=302)
