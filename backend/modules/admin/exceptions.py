"""
Admin module exceptions.
"""

from shared.exceptions import AuthenticationError, NotFoundError, ValidationError


class InvalidAdminCredentialsError(AuthenticationError):
    """Raised when an admin login does not match any account."""

    def __init__(self):
        super().__init__("Invalid admin credentials", code="INVALID_ADMIN_CREDENTIALS")


class InvalidAdminSessionError(AuthenticationError):
    """Raised when an admin bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Admin session is invalid or expired"):
        super().__init__(message, code="INVALID_ADMIN_SESSION")


class AdminExistsError(ValidationError):
    """Raised when creating an admin whose username is taken."""

    def __init__(self, username: str):
        super().__init__(
            f"Admin already exists: {username}",
            code="ADMIN_EXISTS",
            details={"username": username},
        )


class AdminProtectedError(ValidationError):
    """Raised when trying to delete the default admin."""

    def __init__(self, username: str):
        super().__init__(
            "Default admin cannot be deleted",
            code="ADMIN_PROTECTED",
            details={"username": username},
        )


class AdminNotFoundError(NotFoundError):
    """Raised when an admin account doesn't exist."""

    def __init__(self, username: str):
        super().__init__(
            f"Admin not found: {username}",
            code="ADMIN_NOT_FOUND",
            details={"username": username},
        )
