"""
Base exception classes for the Finearr backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps the bases to HTTP status codes in one place.
"""

from typing import Optional, Any


class FinearrError(Exception):
    """
    Base exception for all Finearr errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(FinearrError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(FinearrError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(FinearrError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(FinearrError):
    """Resource not found."""

    status_code = 404


class ExternalServiceError(FinearrError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
