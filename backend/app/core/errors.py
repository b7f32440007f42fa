"""
Application error type and the global exception handlers.

Every error that escapes a route ends up here and is turned into the same
JSON envelope:

    {"status": "error", "statusCode": 500, "message": "..."}

The status code comes from the exception's ``status_code`` attribute when it
has one, otherwise 500.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """
    Base exception for errors raised by the application.

    Args:
        message: Human readable message, returned to the client as-is
        status_code: HTTP status code for the response (default: 500)
        is_operational: True for expected failures (bad upstream response,
            missing configuration), False for programmer errors. Carried for
            logging only, the response is the same either way.
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        is_operational: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.is_operational = is_operational


def error_body(status_code: int, message: str) -> dict:
    """Build the JSON envelope used for every error response."""
    return {
        "status": "error",
        "statusCode": status_code,
        "message": message,
    }


def _status_code_for(exc: Exception) -> int:
    code: Optional[int] = getattr(exc, "status_code", None)
    if isinstance(code, int) and 400 <= code <= 599:
        return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler: map any exception to its status code and the error envelope."""
    status_code = _status_code_for(exc)
    message = str(exc) or "Internal Server Error"

    logger.error(
        "request_failed",
        status_code=status_code,
        error=message,
        error_type=type(exc).__name__,
        is_operational=getattr(exc, "is_operational", False),
        path=request.url.path,
        method=request.method,
        exc_info=status_code >= 500,
    )

    return JSONResponse(status_code=status_code, content=error_body(status_code, message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes get "Not Found - <path>", other HTTP errors keep their detail."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Not Found - {request.url.path}"
    else:
        message = str(exc.detail)

    logger.warning(
        "http_error",
        status_code=exc.status_code,
        error=message,
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or a body of the wrong shape is a plain 400."""
    logger.info(
        "request_validation_failed",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, app_error_handler)
