"""Exception types and FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ._models import ErrorResponse

logger = logging.getLogger(__name__)


class SqlgateError(Exception):
    """Base class for sqlgate errors."""


class ConfigurationError(SqlgateError):
    """Invalid settings or a database URL the driver cannot use."""


class ConnectivityError(SqlgateError):
    """The database could not be reached."""


class BadRequestError(SqlgateError):
    """The client sent a request that cannot be executed."""

    def __init__(self, error: str):
        super().__init__(error)
        self.error = error


class ExecutionError(SqlgateError):
    """The database rejected or failed to run a statement."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def driver_message(exc: BaseException) -> str:
    """Text of the underlying driver error, without SQLAlchemy decoration."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        message = str(exc.orig)
    else:
        message = str(exc)
    return message or type(exc).__name__


def error_response(
    status_code: int,
    error: str,
    message: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render an ErrorResponse, leaving out an empty message."""
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def _bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return error_response(400, exc.error)


async def _execution_error_handler(request: Request, exc: ExecutionError) -> JSONResponse:
    logger.error("Query execution failed: %s", exc.message)
    return error_response(500, "Query execution failed", exc.message)


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers that render every failure as an ErrorResponse."""
    app.add_exception_handler(BadRequestError, _bad_request_handler)
    app.add_exception_handler(ExecutionError, _execution_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
