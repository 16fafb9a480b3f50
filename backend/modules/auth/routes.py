"""
Plex sign-in API endpoints.

The client drives the PIN flow: POST /pin, open authUrl, poll
GET /pin/{id} every few seconds until authToken is set (or its own
timeout expires), then POST /login with that token.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_session_broker

from .interfaces import ISessionBroker
from .models import (
    AutoLoginRequest,
    AutoLoginResponse,
    LoginRequest,
    LoginResponse,
    PinStatus,
    PlexPin,
)

router = APIRouter()


@router.post("/pin", response_model=PlexPin)
async def create_pin(
    broker: ISessionBroker = Depends(get_session_broker),
) -> PlexPin:
    """Start a Plex sign-in."""
    return await broker.issue_pin()


@router.get("/pin/{pin_id}", response_model=PinStatus)
async def check_pin(
    pin_id: str,
    broker: ISessionBroker = Depends(get_session_broker),
) -> PinStatus:
    """Poll a PIN. authToken is null until the user finishes on plex.tv."""
    return await broker.check_pin(pin_id)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    broker: ISessionBroker = Depends(get_session_broker),
) -> LoginResponse:
    """Exchange a Plex token for an application session."""
    session_token, user = await broker.login(request.plex_token)
    return LoginResponse(session_token=session_token, user=user.public())


@router.post("/auto", response_model=AutoLoginResponse)
async def auto_login(
    request: AutoLoginRequest,
    broker: ISessionBroker = Depends(get_session_broker),
) -> AutoLoginResponse:
    """Resume a stored session. 401 if the session or Plex account is gone."""
    user = await broker.auto_login(request.session_token)
    return AutoLoginResponse(user=user.public())
