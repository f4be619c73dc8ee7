# =============================================================================
# gateway/exceptions.py - Error Taxonomy and Mapping
# =============================================================================
# Centralized error handling for the gateway.
#
# Every condition raised while routing or handling a request is turned into
# the same JSON envelope:
#
#   {"error": "...", "message": "...", "timestamp": "..."}
#
# Mapping (checked in this order):
#   not found            -> 404 "Not Found"
#   validation failure   -> 400 "Validation Error"
#   internal fault       -> 500 "Internal Server Error"
#   anything else        -> 500 "Error"
#
# In production, 500 responses hide the underlying message from clients.
# The full detail is always logged at error level.
# =============================================================================

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway.config import Settings
from gateway.log import utc_timestamp

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "The requested resource was not found"
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorEnvelope(BaseModel):
    """JSON body returned for every failed request."""
    error: str
    message: str
    timestamp: str


class GatewayException(Exception):
    """
    Base exception for the gateway.

    Subclasses set `status_code` and `error` (the envelope title).
    """

    status_code: int = 500
    error: str = "Error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(GatewayException):
    """Raised when no route matches the request."""

    status_code = 404
    error = "Not Found"

    def __init__(self, message: str = NOT_FOUND_MESSAGE):
        super().__init__(message)


class ValidationError(GatewayException):
    """Raised when request input fails validation."""

    status_code = 400
    error = "Validation Error"


class InternalServerError(GatewayException):
    """Raised for faults inside the gateway itself."""

    status_code = 500
    error = "Internal Server Error"


# =============================================================================
# Mapping
# =============================================================================

def _validation_message(exc: Exception) -> str:
    if isinstance(exc, (RequestValidationError, PydanticValidationError)):
        parts = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return "; ".join(parts)
    return str(exc)


def _message_of(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def classify(exc: Exception, settings: Settings) -> tuple[int, str, str]:
    """
    Map an exception to (status_code, error title, client-facing message).
    """
    if isinstance(exc, NotFoundError) or (
        isinstance(exc, StarletteHTTPException) and exc.status_code in (404, 405)
    ):
        return NotFoundError.status_code, NotFoundError.error, NOT_FOUND_MESSAGE

    if isinstance(exc, (ValidationError, RequestValidationError, PydanticValidationError)):
        return ValidationError.status_code, ValidationError.error, _validation_message(exc)

    if isinstance(exc, InternalServerError):
        title = InternalServerError.error
    else:
        title = GatewayException.error

    message = GENERIC_ERROR_MESSAGE if settings.is_production else _message_of(exc)
    return 500, title, message


def error_response(
    exc: Exception,
    method: str,
    path: str,
    settings: Settings,
) -> JSONResponse:
    """
    Log a failed request and build its JSON envelope response.
    """
    status_code, title, message = classify(exc, settings)

    logger.error(
        "Request failed",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"context": {"method": method, "path": path, "statusCode": status_code}},
    )

    envelope = ErrorEnvelope(error=title, message=message, timestamp=utc_timestamp())
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


# =============================================================================
# Exception Handlers
# =============================================================================

async def gateway_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Convert routing/validation/gateway exceptions to the JSON envelope.

    Registered on the app for GatewayException, Starlette's HTTPException
    (unmatched routes) and RequestValidationError.
    """
    return error_response(exc, request.method, request.url.path, request.app.state.settings)
