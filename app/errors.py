"""Typed service errors.

Services raise these; routers map them to HTTP responses. Every error derives
from ValueError so callers that only know about ValueError still catch them.
"""
from typing import Any, Optional


class ServiceError(ValueError):
    """Base service error with a stable code and an HTTP status class."""

    code = "SERVICE_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Serialize as the {code, message, details?} error envelope."""
        body = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Malformed or out-of-range input."""

    code = "VALIDATION_ERROR"
    status_code = 400


class UnderageError(ServiceError):
    """User is below the platform minimum age."""

    code = "UNDERAGE"
    status_code = 400


class UnsafeGoalError(ServiceError):
    """Goal failed the safety validation; details carry the validation result."""

    code = "UNSAFE_GOAL"
    status_code = 400


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class ProfileNotFoundError(NotFoundError):
    """No user profile to resolve the age from."""

    code = "PROFILE_NOT_FOUND"


class ConflictError(ServiceError):
    """Uniqueness violation, e.g. duplicate email at registration."""

    code = "CONFLICT"
    status_code = 409
