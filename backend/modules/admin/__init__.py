"""
Admin module.

Admin accounts and the session guard that protects every administrative
endpoint.

Public API:
- IAdminService, IAdminSessionGuard: Interfaces
- AdminService, AdminSessionGuard: Implementations
- AdminPrincipal: The admin behind a validated token
- Admin exceptions
"""

from .interfaces import IAdminService, IAdminSessionGuard
from .models import PROTECTED_ADMIN, AdminAccount, AdminPrincipal, AdminSession, AdminView
from .exceptions import (
    AdminExistsError,
    AdminNotFoundError,
    AdminProtectedError,
    InvalidAdminCredentialsError,
    InvalidAdminSessionError,
)
from .repository import AdminRepository
from .service import AdminService
from .sessions import AdminSessionGuard

__all__ = [
    # Interfaces
    "IAdminService",
    "IAdminSessionGuard",
    # Models
    "PROTECTED_ADMIN",
    "AdminAccount",
    "AdminPrincipal",
    "AdminSession",
    "AdminView",
    # Exceptions
    "AdminExistsError",
    "AdminNotFoundError",
    "AdminProtectedError",
    "InvalidAdminCredentialsError",
    "InvalidAdminSessionError",
    # Implementation
    "AdminRepository",
    "AdminService",
    "AdminSessionGuard",
]
