"""
User-related endpoints.

Provides endpoints for the signed-in Plex user's profile and preferences.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import ISessionBroker
from modules.auth.models import BackgroundResponse, BackgroundUpdate, PublicUser, User

from ..dependencies import get_session_broker
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("/me", response_model=PublicUser)
async def get_current_user_profile(
    user: User = Depends(get_current_user),
) -> PublicUser:
    """
    Get the current user's profile.

    Requires a user session.
    """
    return user.public()


@router.post("/background", response_model=BackgroundResponse)
async def update_background(
    update: BackgroundUpdate,
    user: User = Depends(get_current_user),
    broker: ISessionBroker = Depends(get_session_broker),
) -> BackgroundResponse:
    """Save the user's background preference."""
    updated = await broker.update_background(user.id, update.background)
    return BackgroundResponse(background=updated.background)
