"""
Plex identity provider client.

Talks to the plex.tv v2 API:
- POST /pins          issue a PIN
- GET  /pins/{id}     poll a PIN until it carries an authToken
- GET  /user          resolve the account behind a token

API Endpoint: https://plex.tv/api/v2
"""

import logging
from typing import Any, Optional

import httpx

from shared.config import PlexSettings

from .exceptions import PinNotFoundError, PlexUnavailableError
from .interfaces import IPlexClient
from .models import PinStatus, PlexIdentity, PlexPin

logger = logging.getLogger(__name__)

# Statuses that mean "this token is no longer accepted"
REJECTED_TOKEN_STATUSES = {401, 403, 404, 422}


class PlexClient(IPlexClient):
    """Async plex.tv client built on httpx."""

    def __init__(
        self,
        settings: PlexSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Plex settings (API base, client identifier, product, ...)
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._settings = settings
        self._transport = transport

    def _headers(self, plex_token: Optional[str] = None) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "X-Plex-Client-Identifier": self._settings.client_identifier,
            "X-Plex-Product": self._settings.product,
        }
        if plex_token:
            headers[self._settings.token_header] = plex_token
        return headers

    def auth_url(self, code: str) -> str:
        """Build the plex.tv login URL for a PIN code."""
        params = httpx.QueryParams(
            {
                "clientID": self._settings.client_identifier,
                "code": code,
                "context[device][product]": self._settings.product,
            }
        )
        return f"{self._settings.auth_app_url}?{params}"

    async def _request(
        self,
        method: str,
        path: str,
        plex_token: Optional[str] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self._settings.api_base.rstrip('/')}{path}"
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._settings.timeout,
            ) as client:
                return await client.request(
                    method,
                    url,
                    headers=self._headers(plex_token),
                    params=params,
                )
        except httpx.HTTPError as e:
            raise PlexUnavailableError(str(e))

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            raise PlexUnavailableError("invalid JSON response", response.status_code)
        if not isinstance(data, dict):
            raise PlexUnavailableError("unexpected response shape", response.status_code)
        return data

    async def create_pin(self) -> PlexPin:
        response = await self._request("POST", "/pins", params={"strong": "true"})
        if not response.is_success:
            raise PlexUnavailableError("could not create PIN", response.status_code)

        data = self._json(response)
        if not data.get("id") or not data.get("code"):
            raise PlexUnavailableError("PIN response missing id or code", response.status_code)

        return PlexPin(
            id=str(data["id"]),
            code=data["code"],
            auth_url=self.auth_url(data["code"]),
            expires_in=data.get("expiresIn"),
        )

    async def get_pin(self, pin_id: str) -> PinStatus:
        response = await self._request("GET", f"/pins/{pin_id}")
        if response.status_code == 404:
            raise PinNotFoundError(pin_id)
        if not response.is_success:
            raise PlexUnavailableError("could not check PIN", response.status_code)

        data = self._json(response)
        return PinStatus(
            auth_token=data.get("authToken") or None,
            expires_in=data.get("expiresIn"),
        )

    async def get_account(self, plex_token: str) -> Optional[PlexIdentity]:
        response = await self._request("GET", "/user", plex_token=plex_token)
        if response.status_code in REJECTED_TOKEN_STATUSES:
            return None
        if not response.is_success:
            raise PlexUnavailableError("could not validate token", response.status_code)

        data = self._json(response)
        account_id = data.get("id")
        username = data.get("username") or data.get("email")
        if account_id is None or not username:
            logger.warning("Plex account response missing id or username")
            return None
        return PlexIdentity(id=str(account_id), username=username)
