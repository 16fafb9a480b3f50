"""
Bearer authentication dependencies.

Two kinds of bearer tokens are accepted:
- Admin session tokens (JWTs issued by POST /api/auth/admin/login)
- User session tokens (issued by the Plex sign-in flow)
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.admin.interfaces import IAdminSessionGuard
from modules.admin.models import AdminPrincipal
from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import ISessionBroker
from modules.auth.models import User

from ..dependencies import get_admin_guard, get_session_broker

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    guard: IAdminSessionGuard = Depends(get_admin_guard),
) -> AdminPrincipal:
    """
    Dependency that requires a live admin session.

    Usage:
        @router.get("/admin-only")
        async def admin_route(admin: AdminPrincipal = Depends(require_admin)):
            return {"admin": admin.username}
    """
    return await guard.validate(_token(credentials))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    broker: ISessionBroker = Depends(get_session_broker),
) -> User:
    """
    Dependency that requires a signed-in Plex user.

    Only the stored session is checked; Plex is re-validated on auto-login.
    """
    token = _token(credentials)
    if not token:
        raise MissingTokenError("Missing authorization header")
    return await broker.resolve_session(token)

