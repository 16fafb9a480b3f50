"""
Admin session guard.

Admin sessions are short-lived HS256 JWTs. A token is accepted only while
it is unexpired, correctly signed, and its admin account still exists,
so deleting an account ends its sessions.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from .exceptions import InvalidAdminSessionError
from .models import AdminPrincipal, AdminSession
from .repository import AdminRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdminSessionGuard:
    """Issues and validates admin bearer tokens."""

    ALGORITHM = "HS256"
    AUDIENCE = "finearr-admin"

    def __init__(
        self,
        accounts: AdminRepository,
        secret: Optional[str] = None,
        ttl: timedelta = timedelta(hours=12),
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the guard.

        Args:
            accounts: Admin account repository (existence check)
            secret: Signing secret. When empty, a random per-process secret
                is used and sessions end on restart.
            ttl: Session lifetime
            clock: Time source
        """
        self._accounts = accounts
        self._secret = secret or secrets.token_urlsafe(32)
        self._ttl = ttl
        self._clock = clock

    def issue(self, username: str) -> AdminSession:
        now = self._clock()
        expires_at = now + self._ttl
        token = jwt.encode(
            {
                "sub": username,
                "aud": self.AUDIENCE,
                "iat": now,
                "exp": expires_at,
            },
            self._secret,
            algorithm=self.ALGORITHM,
        )
        return AdminSession(token=token, username=username, expires_at=expires_at)

    async def validate(self, token: Optional[str]) -> AdminPrincipal:
        """
        Validate a bearer token.

        Raises:
            InvalidAdminSessionError: If the token is missing, malformed,
                expired, or its account no longer exists
        """
        if not token:
            raise InvalidAdminSessionError("Missing admin token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                audience=self.AUDIENCE,
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired admin session")
            raise InvalidAdminSessionError("Admin session has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected admin session: {e}")
            raise InvalidAdminSessionError()

        username = payload.get("sub")
        if not username or await self._accounts.get(username) is None:
            logger.debug(f"Rejected admin session for missing account {username}")
            raise InvalidAdminSessionError("Admin account no longer exists")

        return AdminPrincipal(username=username)
