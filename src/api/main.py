"""FastAPI application entry point for Elix.

Every route except /health, /api/version, /auth/signup and /auth/demo-user
requires a bearer token issued by the identity provider.
"""

import logging

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from src.api.alerts import router as alerts_router
from src.api.assets import router as assets_router
from src.api.auth import router as auth_router
from src.api.demo import router as demo_router
from src.api.performance import router as performance_router
from src.api.work_orders import router as work_orders_router
from src.config.settings import get_settings
from src.models.common import new_uuid7

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "dev"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# --- FastAPI app ---
app = FastAPI(
    title="Elix API",
    description="Enterprise asset management: assets, predictive alerts, work orders and KPIs.",
    version=APP_VERSION,
)

# --- CORS middleware ---
# The dashboard is served from a different origin in every environment.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Tag every log line emitted while serving a request with its id and path."""
    structlog.contextvars.clear_contextvars()
    request_id = request.headers.get("x-request-id") or str(new_uuid7())
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


# --- Routers ---
app.include_router(auth_router)
app.include_router(assets_router)
app.include_router(alerts_router)
app.include_router(work_orders_router)
app.include_router(performance_router)
app.include_router(demo_router)


# --- Infrastructure Endpoints ---


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe. Returns 200 always (degraded status if the store is down)."""
    checks: dict[str, bool] = {"api": True}

    try:
        from src.db.session import async_session_factory
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as exc:
        logger.warning("health_check_database_unavailable", error=str(exc))
        checks["database"] = False

    all_ok = all(checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "checks": checks,
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "Elix",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
