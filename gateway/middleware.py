# =============================================================================
# gateway/middleware.py - Request Pipeline
# =============================================================================
# Every request goes through the same stages, in this order:
#
#   1. build_context          - request ID + start time
#   2. log_incoming           - "Incoming request"
#   3. route dispatch         - call_next (router + handler)
#   4. error_response         - only if stage 3 raised
#   5. apply_security_headers - fixed headers, HSTS in production
#   6. log_completed          - "Request completed" with duration
#
# The stages are plain functions; GatewayMiddleware.dispatch calls them in
# sequence and threads a RequestContext through them. The request ID is also
# bound to structlog contextvars so error records carry it.
# =============================================================================

import logging
import time
import uuid
from dataclasses import dataclass

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from gateway.config import Settings
from gateway.exceptions import error_response

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

HSTS_HEADER = ("Strict-Transport-Security", "max-age=31536000; includeSubDomains")

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class RequestContext:
    """Per-request values shared by the pipeline stages."""
    method: str
    url: str
    path: str
    user_agent: str | None
    request_id: uuid.UUID
    started_at: float

    def elapsed_ms(self) -> float:
        """Milliseconds since the request entered the pipeline."""
        return max(0.0, (time.perf_counter() - self.started_at) * 1000)


# =============================================================================
# Stages
# =============================================================================

def build_context(request: Request) -> RequestContext:
    return RequestContext(
        method=request.method,
        url=str(request.url),
        path=request.url.path,
        user_agent=request.headers.get("user-agent"),
        request_id=uuid.uuid4(),
        started_at=time.perf_counter(),
    )


def log_incoming(context: RequestContext) -> None:
    logger.info(
        "Incoming request",
        extra={"context": {
            "method": context.method,
            "url": context.url,
            "userAgent": context.user_agent,
            "requestId": str(context.request_id),
        }},
    )


def apply_security_headers(response: Response, settings: Settings) -> Response:
    """Set the fixed security headers (plus HSTS in production)."""
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    if settings.is_production:
        name, value = HSTS_HEADER
        response.headers[name] = value
    return response


def log_completed(context: RequestContext, status_code: int) -> None:
    logger.info(
        "Request completed",
        extra={"context": {
            "method": context.method,
            "url": context.url,
            "statusCode": status_code,
            "duration": round(context.elapsed_ms(), 3),
            "requestId": str(context.request_id),
        }},
    )


# =============================================================================
# Middleware
# =============================================================================

class GatewayMiddleware(BaseHTTPMiddleware):
    """
    Runs the request pipeline around the router.

    Exceptions the app's own handlers did not convert (unexpected faults)
    surface from call_next and are mapped here, so nothing reaches the
    transport layer.
    """

    def __init__(self, app: ASGIApp, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        context = build_context(request)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(requestId=str(context.request_id))
        log_incoming(context)

        try:
            response = await call_next(request)
        except Exception as exc:
            response = error_response(exc, context.method, context.path, self.settings)

        response.headers[REQUEST_ID_HEADER] = str(context.request_id)
        apply_security_headers(response, self.settings)
        log_completed(context, response.status_code)
        return response
