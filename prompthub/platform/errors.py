from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, InterfaceError, OperationalError

logger = logging.getLogger(__name__)


class PromptHubError(Exception):
    code = "SERVICE_ERROR"
    status_code = 400

    def __init__(self, message: str = "Service error", details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class BelowMinimumError(PromptHubError):
    code = "BELOW_MINIMUM"


class InsufficientBalanceError(PromptHubError):
    code = "INSUFFICIENT_BALANCE"


class MissingFieldError(PromptHubError):
    code = "MISSING_FIELD"

    def __init__(self, fields: list[str], message: str | None = None) -> None:
        self.fields = list(fields)
        super().__init__(
            message or f"Missing required field(s): {', '.join(self.fields)}",
            details={"fields": self.fields},
        )


class IneligibleError(PromptHubError):
    code = "INELIGIBLE"
    status_code = 403


class InvalidValueError(PromptHubError):
    code = "INVALID_VALUE"


class DuplicateRequestError(PromptHubError):
    code = "DUPLICATE_REQUEST"
    status_code = 409


class ConflictError(PromptHubError):
    code = "CONFLICT"
    status_code = 409


class NotFoundError(PromptHubError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Not found", details: dict | None = None) -> None:
        super().__init__(message, details)


class ForbiddenError(PromptHubError):
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "Forbidden", details: dict | None = None) -> None:
        super().__init__(message, details)


class StoreUnavailableError(PromptHubError):
    code = "STORE_UNAVAILABLE"
    status_code = 503

    def __init__(self, message: str = "Data store unavailable", details: dict | None = None) -> None:
        super().__init__(message, details)


def error_response(error: PromptHubError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def _handle_prompthub_error(request: Request, exc: PromptHubError) -> JSONResponse:
    return error_response(exc)


async def _handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.info("Integrity violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(ConflictError("Resource already exists or violates a constraint"))


async def _handle_data_error(request: Request, exc: DataError) -> JSONResponse:
    logger.info("Rejected value on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(InvalidValueError("A value is out of range for its field"))


async def _handle_store_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Store round trip failed on %s %s: %s", request.method, request.url.path, exc)
    return error_response(StoreUnavailableError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PromptHubError, _handle_prompthub_error)
    app.add_exception_handler(IntegrityError, _handle_integrity_error)
    app.add_exception_handler(DataError, _handle_data_error)
    app.add_exception_handler(OperationalError, _handle_store_error)
    app.add_exception_handler(InterfaceError, _handle_store_error)
    app.add_exception_handler(DBAPIError, _handle_store_error)
    app.add_exception_handler(OSError, _handle_store_error)
