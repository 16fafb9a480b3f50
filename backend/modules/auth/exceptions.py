"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ExternalServiceError, NotFoundError


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidSessionError(AuthenticationError):
    """Raised when a session token is unknown or its Plex account is gone."""

    def __init__(self, message: str = "Invalid session"):
        super().__init__(message, code="INVALID_SESSION")


class InvalidPlexTokenError(AuthenticationError):
    """Raised when Plex rejects a token during login."""

    def __init__(self, message: str = "Invalid Plex token"):
        super().__init__(message, code="INVALID_PLEX_TOKEN")


class PinNotFoundError(NotFoundError):
    """Raised when Plex does not know the PIN (unknown or expired)."""

    def __init__(self, pin_id: str):
        super().__init__(
            f"PIN not found: {pin_id}",
            code="PIN_NOT_FOUND",
            details={"pin_id": pin_id},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a stored user record doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class PlexUnavailableError(ExternalServiceError):
    """Raised when plex.tv cannot be reached or answers with a server error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            f"Plex request failed: {message}",
            service="plex",
            code="PLEX_UNAVAILABLE",
            details={"status_code": status_code},
        )
