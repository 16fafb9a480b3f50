"""
Admin API endpoints.

- login_router:    POST /api/auth/admin/login (public)
- accounts_router: /api/admin/accounts (admin-only)
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_admin_service
from api.middleware.auth import require_admin

from .interfaces import IAdminService
from .models import (
    AdminList,
    AdminLoginRequest,
    AdminLoginResponse,
    AdminPrincipal,
    AdminView,
    CreateAdminRequest,
    UpdateAdminRequest,
)

login_router = APIRouter()
accounts_router = APIRouter()


@login_router.post("/login", response_model=AdminLoginResponse)
async def admin_login(
    request: AdminLoginRequest,
    service: IAdminService = Depends(get_admin_service),
) -> AdminLoginResponse:
    """Start an admin session. Send the returned token as a Bearer header."""
    session = await service.login(request.username, request.password)
    return AdminLoginResponse(
        admin=AdminView(username=session.username),
        token=session.token,
        expires_at=session.expires_at,
    )


@accounts_router.get("", response_model=AdminList)
async def list_accounts(
    admin: AdminPrincipal = Depends(require_admin),
    service: IAdminService = Depends(get_admin_service),
) -> AdminList:
    return AdminList(admins=await service.list_admins())


@accounts_router.post("", response_model=AdminList)
async def create_account(
    request: CreateAdminRequest,
    admin: AdminPrincipal = Depends(require_admin),
    service: IAdminService = Depends(get_admin_service),
) -> AdminList:
    return AdminList(admins=await service.create_admin(request.username, request.password))


@accounts_router.put("/{username}", response_model=AdminList)
async def update_account(
    username: str,
    request: UpdateAdminRequest,
    admin: AdminPrincipal = Depends(require_admin),
    service: IAdminService = Depends(get_admin_service),
) -> AdminList:
    """Reset an admin's password."""
    return AdminList(admins=await service.update_password(username, request.password))


@accounts_router.delete("/{username}", response_model=AdminList)
async def delete_account(
    username: str,
    admin: AdminPrincipal = Depends(require_admin),
    service: IAdminService = Depends(get_admin_service),
) -> AdminList:
    """Delete an admin. The default "admin" account cannot be deleted."""
    return AdminList(admins=await service.delete_admin(username))
