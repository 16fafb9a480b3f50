"""
Admin account repository.

Accounts are stored in the "admins" document as a list. The seeded
default account carries a plaintext password that is upgraded to a hash
on first login.
"""

from typing import Callable, Optional, TypeVar

from shared.repository import BaseRepository

from .models import PROTECTED_ADMIN, AdminAccount

R = TypeVar("R")


class AdminRepository(BaseRepository[AdminAccount]):
    """Reads and mutates the admins document."""

    DEFAULTS = {"admins": [{"username": PROTECTED_ADMIN, "password": "admin"}]}

    async def all(self) -> list[AdminAccount]:
        admins = await self._store.read("admins")
        return [AdminAccount.model_validate(data) for data in admins]

    async def get(self, username: str) -> Optional[AdminAccount]:
        for account in await self.all():
            if account.username == username:
                return account
        return None

    async def mutate(self, fn: Callable[[list[AdminAccount]], R]) -> R:
        """
        Apply fn to the account list under the document lock.

        fn may mutate the list in place; it is written back unless fn raises.
        """
        async with self._store.transaction("admins") as docs:
            accounts = [AdminAccount.model_validate(data) for data in docs["admins"]]
            result = fn(accounts)
            docs["admins"] = [
                account.model_dump(mode="json", by_alias=True, exclude_none=True)
                for account in accounts
            ]
        return result
