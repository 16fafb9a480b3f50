"""
Plex session broker implementation.

Runs the three-phase Plex PIN handshake (issue, poll, exchange) and
manages application session tokens bound to users.
"""

import logging
import secrets
from typing import Callable, Optional

from .exceptions import (
    InvalidPlexTokenError,
    InvalidSessionError,
    MissingTokenError,
    UserNotFoundError,
)
from .interfaces import IPlexClient, ISessionBroker
from .models import PinStatus, PlexPin, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def new_session_token() -> str:
    return f"sess_{secrets.token_urlsafe(32)}"


class PlexSessionBroker(ISessionBroker):
    """
    Session broker backed by plex.tv and the users document.

    Stateless between calls: PIN polling keeps nothing server-side, and a
    session is just the token stored on the user record.
    """

    def __init__(
        self,
        plex: IPlexClient,
        users: UserRepository,
        default_background: Optional[str] = None,
        token_factory: Callable[[], str] = new_session_token,
    ):
        self._plex = plex
        self._users = users
        self._default_background = default_background
        self._token_factory = token_factory

    async def issue_pin(self) -> PlexPin:
        return await self._plex.create_pin()

    async def check_pin(self, pin_id: str) -> PinStatus:
        return await self._plex.get_pin(pin_id)

    async def login(self, plex_token: str) -> tuple[str, User]:
        if not plex_token:
            raise MissingTokenError("Missing plexToken")

        identity = await self._plex.get_account(plex_token)
        if identity is None:
            raise InvalidPlexTokenError()

        session_token = self._token_factory()
        user = await self._users.save_login(
            identity,
            plex_token,
            session_token,
            default_background=self._default_background,
        )
        logger.info(f"User {user.username} signed in")
        return session_token, user

    async def resolve_session(self, session_token: str) -> User:
        if not session_token:
            raise MissingTokenError("Missing sessionToken")

        user = await self._users.find_by_session(session_token)
        if user is None:
            raise InvalidSessionError()
        return user

    async def auto_login(self, session_token: str) -> User:
        user = await self.resolve_session(session_token)

        identity = await self._plex.get_account(user.plex_token)
        if identity is None:
            deleted = await self._users.delete_session_holder(user.id, session_token)
            if deleted:
                logger.info(f"Plex no longer accepts the token of {user.username}, user removed")
            raise InvalidSessionError("Plex account not found")

        return user

    async def update_background(self, user_id: str, background: Optional[str]) -> User:
        user = await self._users.update_background(user_id, background)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
