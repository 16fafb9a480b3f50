"""
Permissions module interface.

The request ledger depends on IPermissionService to decide whether a user
may request a category and whether the request is approved immediately.
"""

from typing import Protocol, runtime_checkable

from .models import EffectivePolicy, PermissionPolicy, PermissionUpdate


@runtime_checkable
class IPermissionService(Protocol):
    """
    Interface for permission operations.

    evaluate() is read-only and safe to call concurrently. Mutations are
    admin-only and go through update_policy() / remove_override().
    """

    async def evaluate(self, username: str) -> EffectivePolicy:
        """
        Resolve the effective permissions for a user.

        Args:
            username: Display name of the requesting user

        Returns:
            EffectivePolicy with every field resolved. Missing overrides
            or missing policy data degrade to the defaults, never an error.
        """
        ...

    async def get_policy(self) -> PermissionPolicy:
        """Return the stored policy (defaults plus raw overrides)."""
        ...

    async def update_policy(self, update: PermissionUpdate) -> PermissionPolicy:
        """
        Merge an update into the stored policy.

        Args:
            update: Partial defaults and/or per-user overrides

        Returns:
            The policy after the merge
        """
        ...

    async def remove_override(self, username: str) -> PermissionPolicy:
        """Drop a user's override. No-op if the user has none."""
        ...
