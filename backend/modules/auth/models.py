"""
Authentication module data models.

These models define the Plex PIN handshake, the stored user record and the
public user view returned to clients.
"""

from typing import Optional

from pydantic import Field

from shared.models import CamelModel


class PlexPin(CamelModel):
    """A freshly issued Plex PIN and the URL where the user completes login."""

    id: str = Field(..., description="PIN identifier used for polling")
    code: str = Field(..., description="Code the user confirms on plex.tv")
    auth_url: str = Field(..., description="Plex login URL embedding the code")
    expires_in: Optional[int] = Field(None, description="Seconds until the PIN expires")


class PinStatus(CamelModel):
    """Result of polling a PIN. A null auth token means "not completed yet"."""

    auth_token: Optional[str] = Field(None, description="Plex token once the user logged in")
    expires_in: Optional[int] = Field(None, description="Seconds until the PIN expires")


class PlexIdentity(CamelModel):
    """Account resolved from a Plex token."""

    id: str = Field(..., description="Plex account ID")
    username: str = Field(..., description="Plex username, or email when unset")


class PublicUser(CamelModel):
    """User fields safe to return to clients."""

    id: str
    username: str
    background: Optional[str] = None


class User(PublicUser):
    """
    Stored user record.

    Created on first login. Each login replaces the session token, so
    only the most recent session stays valid.
    """

    plex_token: str = Field(..., description="Long-lived Plex credential")
    session_token: str = Field(..., description="Current application session token")

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, username=self.username, background=self.background)


class LoginRequest(CamelModel):
    plex_token: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    session_token: str
    user: PublicUser


class AutoLoginRequest(CamelModel):
    session_token: str = Field(..., min_length=1)


class AutoLoginResponse(CamelModel):
    user: PublicUser


class BackgroundUpdate(CamelModel):
    background: Optional[str] = Field(None, description="Background image URL, null to reset")


class BackgroundResponse(CamelModel):
    status: str = "updated"
    background: Optional[str] = None
