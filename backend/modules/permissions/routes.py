"""
Permission policy API endpoints.

All endpoints are admin-only.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_permission_service
from api.middleware.auth import require_admin
from modules.admin.models import AdminPrincipal

from .interfaces import IPermissionService
from .models import PermissionPolicy, PermissionUpdate

router = APIRouter()


@router.get("", response_model=PermissionPolicy)
async def get_permissions(
    admin: AdminPrincipal = Depends(require_admin),
    service: IPermissionService = Depends(get_permission_service),
) -> PermissionPolicy:
    """Get the default flags and all per-user overrides."""
    return await service.get_policy()


@router.put("", response_model=PermissionPolicy)
async def update_permissions(
    update: PermissionUpdate,
    admin: AdminPrincipal = Depends(require_admin),
    service: IPermissionService = Depends(get_permission_service),
) -> PermissionPolicy:
    """
    Merge defaults and/or per-user overrides into the policy.

    Fields absent from the body are left unchanged.
    """
    return await service.update_policy(update)


@router.delete("/users/{username}", response_model=PermissionPolicy)
async def remove_user_override(
    username: str,
    admin: AdminPrincipal = Depends(require_admin),
    service: IPermissionService = Depends(get_permission_service),
) -> PermissionPolicy:
    """Drop a user's override so the defaults apply again."""
    return await service.remove_override(username)
