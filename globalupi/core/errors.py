"""Error taxonomy and the FastAPI handlers that shape failures.

Every failure leaves the API as ``{"success": false, "message": ...}``. Core
errors carry their HTTP status and a caller-safe message; anything else is
logged and reported with a generic message.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger("globalupi.errors")

# Pydantic error types reported as a plain "required" message.
_REQUIRED_TYPES = {"missing", "string_too_short"}


class ServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    default_message = "All fields are required"


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class InvalidCredentials(Unauthorized):
    default_message = "Invalid email or password"


class DuplicateEmail(ServiceError):
    default_message = "Email already exists"


class InsufficientFunds(ServiceError):
    default_message = "Insufficient balance"


class UnknownPair(ServiceError):
    default_message = "Invalid currency pair"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class StorageFailure(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "message": message}
    )


def service_error_handler(request: Request, exc: ServiceError):  # type: ignore
    if exc.status_code >= 500:
        logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path)
    return _failure(exc.status_code, exc.message)


def not_found_handler(request: Request, exc):  # type: ignore
    if exc.status_code != status.HTTP_404_NOT_FOUND:
        return _failure(exc.status_code, str(exc.detail))
    return _failure(
        status.HTTP_404_NOT_FOUND, f"No route for {request.method} {request.url.path}"
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    errors = exc.errors()
    missing = any(err.get("type") in _REQUIRED_TYPES for err in errors)
    if missing or not errors:
        message = ValidationError.default_message
    else:
        err = errors[0]
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        message = f"{field}: {err.get('msg')}" if field else str(err.get("msg"))
    return _failure(status.HTTP_400_BAD_REQUEST, message)


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return _failure(
        status.HTTP_500_INTERNAL_SERVER_ERROR, StorageFailure.default_message
    )
