"""
User repository.

Users are stored in the "users" document as a mapping of Plex account ID
to user record.
"""

from typing import Optional

from shared.repository import BaseRepository

from .models import PlexIdentity, User


class UserRepository(BaseRepository[User]):
    """Reads and mutates the users document."""

    DEFAULTS = {"users": {}}

    async def get(self, user_id: str) -> Optional[User]:
        users = await self._store.read("users")
        data = users.get(user_id)
        return User.model_validate(data) if data else None

    async def find_by_session(self, session_token: str) -> Optional[User]:
        """Exact-match lookup of the user holding this session token."""
        users = await self._store.read("users")
        for data in users.values():
            if data.get("sessionToken") == session_token:
                return User.model_validate(data)
        return None

    async def save_login(
        self,
        identity: PlexIdentity,
        plex_token: str,
        session_token: str,
        default_background: Optional[str] = None,
    ) -> User:
        """
        Create or refresh a user on login.

        The session token and Plex credential are replaced; an existing
        background preference is kept.
        """
        async with self._store.transaction("users") as docs:
            users = docs["users"]
            existing = users.get(identity.id) or {}
            user = User(
                id=identity.id,
                username=identity.username,
                plex_token=plex_token,
                session_token=session_token,
                background=existing.get("background") or default_background or None,
            )
            users[identity.id] = user.to_document()
        return user

    async def delete_session_holder(self, user_id: str, session_token: str) -> bool:
        """
        Delete a user, but only while it still holds the given session.

        A concurrent re-login that replaced the session wins.
        """
        async with self._store.transaction("users") as docs:
            users = docs["users"]
            data = users.get(user_id)
            if not data or data.get("sessionToken") != session_token:
                return False
            del users[user_id]
        return True

    async def update_background(self, user_id: str, background: Optional[str]) -> Optional[User]:
        async with self._store.transaction("users") as docs:
            data = docs["users"].get(user_id)
            if not data:
                return None
            data["background"] = background
            user = User.model_validate(data)
        return user
