"""Domain error hierarchy and the handlers that render it as JSON."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from juvo.core.metrics import record_domain_error

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception.

    ``code`` names the failed precondition and is what clients branch on;
    subclasses set a default, call sites may narrow it.
    """

    status_code = 400
    code = "app_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class NotFoundException(AppException):
    status_code = 404
    code = "not_found"


class ForbiddenException(AppException):
    """Actor lacks the role or the ownership the operation needs."""

    status_code = 403
    code = "forbidden"


class InvalidStateException(AppException):
    """Transition is not legal from the booking's current status."""

    status_code = 409
    code = "invalid_state"


class InvalidInputException(AppException):
    status_code = 422
    code = "validation_error"


class ScheduleConflictException(AppException):
    """Worker is already committed for the requested time."""

    status_code = 409
    code = "schedule_conflict"


class PreconditionFailedException(AppException):
    """Worker account is not ready to take jobs."""

    status_code = 422
    code = "precondition_failed"


class StorageException(AppException):
    """Persistence failed. The only error class a client may retry as-is."""

    status_code = 503
    code = "storage_error"


def error_response(
    status_code: int,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
        headers=headers,
    )


async def app_exception_handler(_: Request, exc: AppException) -> JSONResponse:
    record_domain_error(exc.code)
    return error_response(exc.status_code, exc.code, exc.message)


async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    """Render framework HTTP errors (auth, routing) in the same envelope."""
    return error_response(exc.status_code, "http_error", str(exc.detail), headers=exc.headers)


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies and params in the same envelope."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    record_domain_error(InvalidInputException.code)
    return error_response(InvalidInputException.status_code, InvalidInputException.code, message)


async def storage_exception_handler(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage error: %s", exc)
    return error_response(StorageException.status_code, StorageException.code, "Storage is unavailable")


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return error_response(500, "internal_error", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
