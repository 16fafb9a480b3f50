"""
Admin module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import AdminPrincipal, AdminSession, AdminView


@runtime_checkable
class IAdminService(Protocol):
    """Interface for admin login and account management."""

    async def login(self, username: str, password: str) -> AdminSession:
        """
        Verify credentials and open an admin session.

        Raises:
            InvalidAdminCredentialsError: If no account matches
        """
        ...

    async def list_admins(self) -> list[AdminView]:
        ...

    async def create_admin(self, username: str, password: str) -> list[AdminView]:
        """
        Raises:
            AdminExistsError: If the username is taken
        """
        ...

    async def update_password(self, username: str, password: Optional[str]) -> list[AdminView]:
        """
        Change a password. A blank password keeps the current one.

        Raises:
            AdminNotFoundError: If the account doesn't exist
        """
        ...

    async def delete_admin(self, username: str) -> list[AdminView]:
        """
        Delete an account. Deleting an unknown account is a no-op.

        Raises:
            AdminProtectedError: For the default "admin" account
        """
        ...


@runtime_checkable
class IAdminSessionGuard(Protocol):
    """Interface for admin bearer token validation."""

    def issue(self, username: str) -> AdminSession:
        ...

    async def validate(self, token: Optional[str]) -> AdminPrincipal:
        """
        Raises:
            InvalidAdminSessionError: If the token is not a live admin session
        """
        ...
