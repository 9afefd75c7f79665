"""Application errors and their HTTP translation."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""

    code = "app_error"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **extra: Any) -> None:
        """Initialize error with a human-readable message and optional body fields."""
        self.message = message
        self.extra = extra
        super().__init__(message)


class NotFoundError(AppError):
    """Record is missing or belongs to another owner."""

    code = "not_found"
    http_status = status.HTTP_404_NOT_FOUND


class PreconditionFailedError(AppError):
    """A business rule blocks the operation."""

    code = "precondition_failed"
    http_status = status.HTTP_400_BAD_REQUEST


class DuplicateEntryError(PreconditionFailedError):
    """A rent entry already exists for the billing period."""

    code = "duplicate_entry"
    http_status = status.HTTP_409_CONFLICT


class OccupancyConflictError(PreconditionFailedError):
    """Another assignment claimed the tenant first."""

    code = "occupancy_conflict"
    http_status = status.HTTP_409_CONFLICT


class ValidationFailedError(AppError):
    """A value violates a schema constraint."""

    code = "validation_failed"
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthenticationError(AppError):
    """Missing or invalid credentials."""

    code = "not_authenticated"
    http_status = status.HTTP_401_UNAUTHORIZED


def error_response(error: AppError) -> dict[str, Any]:
    """Create a standardized error body."""
    return {"message": error.message, "code": error.code, **jsonable_encoder(error.extra)}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.http_status, content=error_response(exc), headers=headers)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Request validation failed",
            "code": ValidationFailedError.code,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "code": "unexpected"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the translation from application errors to JSON responses."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unexpected_error_handler)
