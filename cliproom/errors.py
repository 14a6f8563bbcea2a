"""Application errors and their mapping to JSON error responses.

Services raise the ``AppError`` subclasses below; the handlers registered by
``setup_exception_handlers`` turn them into ``{"error": message}`` bodies with
the matching status code. Anything unexpected becomes a logged 500 with a
generic message.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base application error with a client-facing message."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Missing or malformed request fields."""
    status_code = 400


class AuthenticationError(AppError):
    """No session, a bad session, or an unknown API key."""
    status_code = 401


class AccessDeniedError(AppError):
    """Authenticated, but not a member or not the owner."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate username or membership (reported as 400)."""
    status_code = 400


class InternalError(AppError):
    status_code = 500


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


def setup_exception_handlers(app) -> None:
    """Register exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
            return error_response(INTERNAL_ERROR_MESSAGE, exc.status_code)
        logger.debug("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(_describe_validation_error(exc), 400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return error_response(INTERNAL_ERROR_MESSAGE, 500)
