# =============================================================================
# gateway/main.py - FastAPI Application Factory
# =============================================================================
# Builds the gateway application: routers, exception handlers and the
# request pipeline middleware.
#
# Usage:
#   uvicorn gateway.main:create_app --factory
#   python -m gateway
# =============================================================================

import asyncio
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway import __version__
from gateway.config import Settings, get_settings
from gateway.exceptions import GatewayException, gateway_exception_handler
from gateway.log import configure_logging
from gateway.middleware import GatewayMiddleware
from gateway.routers import health, metrics, root
from gateway.server import loop_exception_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: route unhandled task errors to the log, announce the address
    - Shutdown: log once in-flight requests have drained
    """
    settings: Settings = app.state.settings

    asyncio.get_running_loop().set_exception_handler(loop_exception_handler)
    logger.info(
        f"Gateway is running at {settings.HOSTNAME}:{settings.PORT}",
        extra={"context": {"environment": settings.ENVIRONMENT}},
    )

    yield

    logger.info("Gateway shut down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create a configured gateway application.

    Args:
        settings: Settings to use; loaded from the environment when omitted

    Returns:
        FastAPI: The application, with settings on `app.state.settings`
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Cloud Gateway",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    app.add_middleware(GatewayMiddleware, settings=settings)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    # Unexpected exceptions are mapped by GatewayMiddleware itself

    app.add_exception_handler(GatewayException, gateway_exception_handler)
    app.add_exception_handler(StarletteHTTPException, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, gateway_exception_handler)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(root.router, tags=["Root"])
    app.include_router(health.router, tags=["Health"])
    app.include_router(metrics.router, tags=["Metrics"])

    return app
