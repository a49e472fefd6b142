"""Club API: FastAPI application entry point."""

import signal
import threading
import uuid
from contextlib import asynccontextmanager

# CRITICAL ORDER: configure_structlog MUST be called before all other app imports
# (structlog caches the processor chain on first use).
from club_api.core.logging import configure_structlog
from club_api.core.config import get_settings as _get_settings_early

_early_settings = _get_settings_early()
configure_structlog(
    log_level="DEBUG" if _early_settings.debug else "INFO",
    json_logs=not _early_settings.debug,
)

import structlog

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from club_api.api.routes import api_router
from club_api.core.config import Settings, get_settings
from club_api.db import close_db, init_db
from club_api.middleware.correlation import (
    setup_correlation_middleware,
    get_correlation_id,
)
from club_api.services.notifier import Notifier
from club_api.services.object_storage import ObjectStorage
from club_api.services.payment_gateway import PaymentGateway, StripeGateway

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # SIGTERM flips this so the health check returns 503 while draining
    app.state.shutting_down = False

    def handle_sigterm(signum, frame):
        app.state.shutting_down = True
        logger.info("sigterm_received", action="health_check_503_draining_connections")

    # Signal handlers can only be installed from the main thread (not under TestClient)
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, handle_sigterm)

    settings: Settings = app.state.settings
    logger.info("startup_begin", app_name=settings.app_name, debug=settings.debug)

    await init_db(settings.database_url)
    logger.info("db_initialized")

    if not settings.stripe_webhook_secret:
        logger.warning("stripe_webhook_unverified", reason="STRIPE_WEBHOOK_SECRET not set")
    if not app.state.notifier.enabled:
        logger.warning("email_disabled", reason="SMTP_HOST not set")

    yield

    logger.info("shutdown_begin")
    await close_db()
    logger.info("shutdown_complete")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Log HTTPExceptions with a debug_id and return a sanitized body."""
    debug_id = str(uuid.uuid4())

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "http_exception",
        status_code=exc.status_code,
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        detail=exc.detail,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "debug_id": debug_id},
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled errors.

    Logs the full traceback and returns a generic 500; no internals are leaked.
    """
    debug_id = str(uuid.uuid4())

    logger.error(
        "unhandled_exception",
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "debug_id": debug_id},
    )


def create_app(
    settings: Settings | None = None,
    *,
    gateway: PaymentGateway | None = None,
    notifier: Notifier | None = None,
    storage: ObjectStorage | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators default to the real Stripe/SMTP/S3 clients built from
    ``settings``; tests pass fakes instead.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Backend for the university computing club: events, index swaps, merch and members",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.gateway = gateway or StripeGateway(
        api_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        currency=settings.checkout_currency,
    )
    app.state.notifier = notifier or Notifier.from_settings(settings)
    app.state.storage = storage or ObjectStorage.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation ID middleware (runs first on incoming requests)
    setup_correlation_middleware(app)

    app.exception_handler(HTTPException)(http_exception_handler)
    app.exception_handler(Exception)(generic_exception_handler)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "club_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
