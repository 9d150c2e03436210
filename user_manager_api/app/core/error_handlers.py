"""
Exception handlers that convert errors into the API failure shape.

Every failed request answers with ``{"success": false, "message": ...}``
so that clients can rely on the ``success`` flag and display
``message`` as is.  Store errors keep their own message; unexpected
database errors are logged with a traceback and reported with a
generic message so that internals never reach the client.
"""

import logging
import sqlite3

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import NotFoundError, UserManagerError, ValidationError

logger = logging.getLogger(__name__)


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _describe_request_errors(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid request: {location}: {first.get('msg')}"
    return f"Invalid request: {first.get('msg')}"


async def user_manager_error_handler(request: Request, exc: UserManagerError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return failure_response(status_code, exc.message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_request_errors(exc)
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return failure_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return failure_response(exc.status_code, str(exc.detail))


async def database_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_error_handling(app: FastAPI) -> None:
    """Register all exception handlers on ``app``."""
    app.add_exception_handler(UserManagerError, user_manager_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(sqlite3.Error, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
