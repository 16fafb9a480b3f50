"""
Permission policy repository.

Stores the policy as a single "permissions" document.
"""

from typing import Callable

from shared.repository import BaseRepository

from .models import PermissionFlags, PermissionPolicy


DEFAULT_POLICY = PermissionPolicy(defaults=PermissionFlags()).to_document()


class PermissionRepository(BaseRepository[PermissionPolicy]):
    """Reads and mutates the permissions document."""

    DEFAULTS = {"permissions": DEFAULT_POLICY}

    async def get(self) -> PermissionPolicy:
        data = await self._store.read("permissions")
        return PermissionPolicy.model_validate(data)

    async def mutate(self, fn: Callable[[dict], None]) -> PermissionPolicy:
        """
        Apply fn to the raw document under the document lock.

        Args:
            fn: Callable that mutates the raw policy dict in place

        Returns:
            The policy as written
        """
        async with self._store.transaction("permissions") as docs:
            document = docs["permissions"]
            document.setdefault("defaults", {})
            document.setdefault("users", {})
            fn(document)
            policy = PermissionPolicy.model_validate(document)
            docs["permissions"] = policy.model_dump(mode="json", by_alias=True, exclude_none=True)
        return policy
