"""
Permission service implementation.

Resolves effective permissions and applies admin policy updates.
"""

from .interfaces import IPermissionService
from .models import (
    EffectivePolicy,
    PermissionOverride,
    PermissionPolicy,
    PermissionUpdate,
)
from .repository import PermissionRepository


def resolve_effective(policy: PermissionPolicy, username: str) -> EffectivePolicy:
    """
    Merge a user's override with the policy defaults, field by field.

    Args:
        policy: Stored policy
        username: User to evaluate

    Returns:
        EffectivePolicy with every flag resolved
    """
    resolved = policy.defaults.model_dump()
    override = policy.users.get(username) or PermissionOverride()
    for field, value in override.model_dump().items():
        if value is not None:
            resolved[field] = value
    return EffectivePolicy(username=username, **resolved)


class PermissionService(IPermissionService):
    """Permission service backed by the permissions document."""

    def __init__(self, repository: PermissionRepository):
        self._repository = repository

    async def evaluate(self, username: str) -> EffectivePolicy:
        policy = await self._repository.get()
        return resolve_effective(policy, username)

    async def get_policy(self) -> PermissionPolicy:
        return await self._repository.get()

    async def update_policy(self, update: PermissionUpdate) -> PermissionPolicy:
        defaults = (
            update.defaults.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
            if update.defaults
            else {}
        )
        users = {
            username: override.model_dump(by_alias=True, exclude_unset=True)
            for username, override in (update.users or {}).items()
        }

        def apply(document: dict) -> None:
            document["defaults"].update(defaults)
            for username, fields in users.items():
                current = document["users"].get(username) or {}
                current.update(fields)
                document["users"][username] = current

        return await self._repository.mutate(apply)

    async def remove_override(self, username: str) -> PermissionPolicy:
        def apply(document: dict) -> None:
            document["users"].pop(username, None)

        return await self._repository.mutate(apply)
