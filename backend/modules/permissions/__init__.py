"""
Permissions module.

Resolves what a user may request and whether requests are auto-approved.

Public API:
- IPermissionService: Interface for permission operations
- PermissionService: Document-backed implementation
- resolve_effective: Pure override/default merge
- PermissionFlags, PermissionOverride, PermissionPolicy, EffectivePolicy,
  PermissionUpdate: Models
"""

from .interfaces import IPermissionService
from .models import (
    EffectivePolicy,
    PermissionFlags,
    PermissionOverride,
    PermissionPolicy,
    PermissionUpdate,
)
from .repository import PermissionRepository
from .service import PermissionService, resolve_effective

__all__ = [
    # Interface
    "IPermissionService",
    # Models
    "EffectivePolicy",
    "PermissionFlags",
    "PermissionOverride",
    "PermissionPolicy",
    "PermissionUpdate",
    # Implementation
    "PermissionRepository",
    "PermissionService",
    "resolve_effective",
]
