"""
Admin module data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.models import CamelModel


PROTECTED_ADMIN = "admin"


class AdminAccount(CamelModel):
    """
    Stored admin account.

    password_hash is a passlib hash. password only appears on accounts
    written before hashing was introduced (including the seeded default)
    and is replaced by a hash on the next successful login.
    """

    username: str
    password_hash: Optional[str] = None
    password: Optional[str] = None


class AdminPrincipal(CamelModel):
    """The admin behind a validated session token."""

    username: str

    model_config = {"frozen": True}


class AdminView(CamelModel):
    username: str


class AdminList(CamelModel):
    admins: list[AdminView]


class AdminLoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminLoginResponse(CamelModel):
    admin: AdminView
    token: str = Field(..., description="Bearer token for admin endpoints")
    expires_at: datetime


class CreateAdminRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateAdminRequest(CamelModel):
    password: Optional[str] = Field(None, description="New password; blank keeps the current one")


class AdminSession(CamelModel):
    """An issued admin session token."""

    token: str
    username: str
    expires_at: datetime
