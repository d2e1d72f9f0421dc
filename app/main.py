"""FastAPI application factory. No business logic; only wiring, middleware and error handlers."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.limiter import build_limiter
from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings, load_signing_keys
from app.core.database import Database
from app.core.errors import StoreUnavailableError
from app.core.log import configure_logging

logger = logging.getLogger(__name__)

# Baseline hardening headers added to every response
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup: verify the database answers within DB_CONNECT_TIMEOUT_SEC, or abort.
    Shutdown: dispose of the engine.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database
    logger.info(
        "Political Gossips API starting (environment=%s, signing_mode=%s)",
        settings.APP_ENV,
        app.state.signing_keys.mode.value,
    )
    try:
        database.verify_connection()
    except StoreUnavailableError as e:
        logger.critical("Database unreachable at startup; aborting: %s", e.cause)
        raise
    if settings.DB_AUTO_CREATE:
        database.create_all()
        logger.info("Database tables created")
    logger.info("Database connected")

    yield

    database.dispose()
    logger.info("Political Gossips API shutdown complete")


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(
        "Database unavailable: %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc.cause,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the API. Signing keys are resolved here, so missing secrets fail
    before the server accepts traffic.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    signing_keys = load_signing_keys(settings)

    app = FastAPI(
        title="Political Gossips API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.signing_keys = signing_keys
    app.state.database = database or Database.from_settings(settings)
    app.state.limiter = build_limiter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        logger.info(
            "%s %s -> %s (%.1f ms, origin=%s)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            request.headers.get("origin"),
        )
        return response

    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"status": "ok", "message": "Political Gossips API is running"}

    return app
