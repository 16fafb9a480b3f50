"""
Permissions module data models.

A policy is a set of global default flags plus optional per-user overrides.
Overrides are partial: an unset field falls back to the default when the
policy is evaluated, never when it is stored.
"""

from typing import Optional

from pydantic import Field

from shared.models import CamelModel, MediaCategory


class PermissionFlags(CamelModel):
    """A fully specified set of permission flags."""

    can_request_movies: bool = Field(default=True, description="May request movies")
    can_request_shows: bool = Field(default=True, description="May request shows")
    auto_approve: bool = Field(default=False, description="Requests skip admin review")

    def can_request(self, category: MediaCategory) -> bool:
        """Check the category-specific request flag."""
        if category is MediaCategory.MOVIE:
            return self.can_request_movies
        return self.can_request_shows


class PermissionOverride(CamelModel):
    """Per-user override. None means "use the default"."""

    can_request_movies: Optional[bool] = None
    can_request_shows: Optional[bool] = None
    auto_approve: Optional[bool] = None


class PermissionPolicy(CamelModel):
    """The stored permission policy document."""

    defaults: PermissionFlags = Field(default_factory=PermissionFlags)
    users: dict[str, PermissionOverride] = Field(default_factory=dict)


class EffectivePolicy(PermissionFlags):
    """Permission flags for one user after merging the override with the defaults."""

    username: str = Field(..., description="User the policy was evaluated for")


class PermissionUpdate(CamelModel):
    """
    Admin update request.

    Merge semantics: only the fields present in the body change. Within a
    user override, an explicit null clears that field back to the default.
    """

    defaults: Optional[PermissionOverride] = None
    users: Optional[dict[str, PermissionOverride]] = None
