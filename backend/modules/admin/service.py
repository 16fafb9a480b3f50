"""
Admin account service implementation.

Handles admin login and account management. Passwords are hashed with
passlib; plaintext passwords from older admins documents are accepted
once and rehashed.
"""

import hmac
import logging
from typing import Optional

from passlib.context import CryptContext

from .exceptions import (
    AdminExistsError,
    AdminNotFoundError,
    AdminProtectedError,
    InvalidAdminCredentialsError,
)
from .interfaces import IAdminService
from .models import (
    PROTECTED_ADMIN,
    AdminAccount,
    AdminSession,
    AdminView,
)
from .repository import AdminRepository
from .sessions import AdminSessionGuard

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(account: AdminAccount, password: str) -> bool:
    """Check a password against a hashed or legacy plaintext account."""
    if account.password_hash:
        return pwd_context.verify(password, account.password_hash)
    if account.password is not None:
        return hmac.compare_digest(account.password.encode(), password.encode())
    return False


class AdminService(IAdminService):
    """Admin service backed by the admins document."""

    def __init__(self, accounts: AdminRepository, guard: AdminSessionGuard):
        self._accounts = accounts
        self._guard = guard

    async def login(self, username: str, password: str) -> AdminSession:
        account = await self._accounts.get(username)
        if account is None or not verify_password(account, password):
            raise InvalidAdminCredentialsError()

        if not account.password_hash:
            await self._rehash(username, password)

        logger.info(f"Admin {username} signed in")
        return self._guard.issue(username)

    async def _rehash(self, username: str, password: str) -> None:
        hashed = hash_password(password)

        def apply(accounts: list[AdminAccount]) -> None:
            for account in accounts:
                if account.username == username:
                    account.password_hash = hashed
                    account.password = None

        await self._accounts.mutate(apply)

    async def list_admins(self) -> list[AdminView]:
        return [AdminView(username=a.username) for a in await self._accounts.all()]

    async def create_admin(self, username: str, password: str) -> list[AdminView]:
        hashed = hash_password(password)

        def apply(accounts: list[AdminAccount]) -> None:
            if any(a.username == username for a in accounts):
                raise AdminExistsError(username)
            accounts.append(AdminAccount(username=username, password_hash=hashed))

        await self._accounts.mutate(apply)
        logger.info(f"Admin {username} created")
        return await self.list_admins()

    async def update_password(self, username: str, password: Optional[str]) -> list[AdminView]:
        hashed = hash_password(password) if password else None

        def apply(accounts: list[AdminAccount]) -> None:
            for account in accounts:
                if account.username == username:
                    if hashed:
                        account.password_hash = hashed
                        account.password = None
                    return
            raise AdminNotFoundError(username)

        await self._accounts.mutate(apply)
        return await self.list_admins()

    async def delete_admin(self, username: str) -> list[AdminView]:
        if username == PROTECTED_ADMIN:
            raise AdminProtectedError(username)

        def apply(accounts: list[AdminAccount]) -> None:
            accounts[:] = [a for a in accounts if a.username != username]

        await self._accounts.mutate(apply)
        logger.info(f"Admin {username} deleted")
        return await self.list_admins()
