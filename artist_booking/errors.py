"""
Operational errors raised by the domain services.

Every AppError maps to a client-facing status code and is rendered by the
handlers registered in main.py as a "fail" envelope. Anything that is not an
AppError is treated as an internal failure and rendered as a generic 500.
"""
from __future__ import annotations

from typing import Optional

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_INTERNAL_ERROR = 500

MSG_VALIDATION_ERROR = "Validation Error"
MSG_INTERNAL_ERROR = "Something went wrong!"


class AppError(Exception):
    """Base class for errors the client can correct."""

    status_code = STATUS_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[list[dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"

    def to_dict(self) -> dict:
        body = {"status": self.status, "message": self.message}
        if self.errors:
            body["error"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed, missing or mutually exclusive input."""

    status_code = STATUS_BAD_REQUEST

    def __init__(self, errors: list[dict[str, str]], message: str = MSG_VALIDATION_ERROR):
        super().__init__(message, errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class AuthenticationError(AppError):
    status_code = STATUS_UNAUTHORIZED


class AuthorizationError(AppError):
    status_code = STATUS_FORBIDDEN


class NotFoundError(AppError):
    """Entity is absent, or its existence is deliberately hidden from the caller."""

    status_code = STATUS_NOT_FOUND


class StateConflictError(AppError):
    """Operation is not valid for the entity's current lifecycle state."""

    status_code = STATUS_BAD_REQUEST
