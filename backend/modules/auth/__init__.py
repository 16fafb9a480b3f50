"""
Authentication module.

Handles the Plex PIN sign-in flow and application user sessions.

Public API:
- ISessionBroker: Interface for session operations
- IPlexClient: Interface for the Plex identity provider
- PlexSessionBroker, PlexClient: Implementations
- User, PublicUser, PlexPin, PinStatus, PlexIdentity: Models
- Auth exceptions: InvalidSessionError, InvalidPlexTokenError, etc.
"""

from .interfaces import IPlexClient, ISessionBroker
from .models import PinStatus, PlexIdentity, PlexPin, PublicUser, User
from .exceptions import (
    InvalidPlexTokenError,
    InvalidSessionError,
    MissingTokenError,
    PinNotFoundError,
    PlexUnavailableError,
    UserNotFoundError,
)
from .plex import PlexClient
from .repository import UserRepository
from .service import PlexSessionBroker

__all__ = [
    # Interfaces
    "IPlexClient",
    "ISessionBroker",
    # Models
    "PinStatus",
    "PlexIdentity",
    "PlexPin",
    "PublicUser",
    "User",
    # Exceptions
    "InvalidPlexTokenError",
    "InvalidSessionError",
    "MissingTokenError",
    "PinNotFoundError",
    "PlexUnavailableError",
    "UserNotFoundError",
    # Implementation
    "PlexClient",
    "UserRepository",
    "PlexSessionBroker",
]
