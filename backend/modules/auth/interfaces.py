"""
Authentication module interfaces.

Other modules should depend on ISessionBroker, not the concrete implementation.
IPlexClient isolates the plex.tv HTTP calls so the broker can be tested
with a fake provider.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import PinStatus, PlexIdentity, PlexPin, User


@runtime_checkable
class IPlexClient(Protocol):
    """Interface for the Plex identity provider."""

    async def create_pin(self) -> PlexPin:
        """
        Request a short-lived PIN.

        Raises:
            PlexUnavailableError: If plex.tv cannot issue a PIN
        """
        ...

    async def get_pin(self, pin_id: str) -> PinStatus:
        """
        Poll a PIN.

        Raises:
            PinNotFoundError: If the PIN is unknown or expired
            PlexUnavailableError: If plex.tv cannot be reached
        """
        ...

    async def get_account(self, plex_token: str) -> Optional[PlexIdentity]:
        """
        Resolve the account behind a Plex token.

        Returns:
            PlexIdentity, or None if Plex rejects the token

        Raises:
            PlexUnavailableError: If plex.tv cannot be reached
        """
        ...


@runtime_checkable
class ISessionBroker(Protocol):
    """
    Interface for the PIN issue / poll / exchange protocol.

    The broker holds no per-PIN state. Poll interval, timeout and
    cancellation belong to the caller.
    """

    async def issue_pin(self) -> PlexPin:
        """Issue a PIN and the URL where the user completes login."""
        ...

    async def check_pin(self, pin_id: str) -> PinStatus:
        """Poll a PIN; auth_token stays None until login completes."""
        ...

    async def login(self, plex_token: str) -> tuple[str, User]:
        """
        Exchange a Plex token for a new application session.

        Returns:
            (session_token, user). Any earlier session of the user stops
            resolving.

        Raises:
            InvalidPlexTokenError: If Plex rejects the token
        """
        ...

    async def auto_login(self, session_token: str) -> User:
        """
        Resume a session, re-validating the Plex credential.

        Raises:
            InvalidSessionError: If the token is unknown, or Plex no longer
                accepts the user's credential (the user is deleted)
        """
        ...

    async def resolve_session(self, session_token: str) -> User:
        """
        Look up the user bound to a session token without calling Plex.

        Raises:
            InvalidSessionError: If the token is unknown
        """
        ...

    async def update_background(self, user_id: str, background: Optional[str]) -> User:
        """Update a user's background preference."""
        ...
