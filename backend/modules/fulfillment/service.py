"""
Fulfillment implementation.

- ArrClient: posts items to Radarr (movies) or Sonarr (shows)
- FulfillmentDispatcher: runs ArrClient.send as a background task
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from shared.config import DownloaderTarget, Settings
from shared.models import MediaCategory, MediaItem

from .exceptions import DispatchError
from .interfaces import IDownloaderClient, IFulfillmentDispatcher

logger = logging.getLogger(__name__)


class ArrClient(IDownloaderClient):
    """
    Downloader client for the *arr v3 API.

    One target per category. An unconfigured target (no base URL or no
    API key) turns send() into a no-op.
    """

    SERVICES = {
        MediaCategory.MOVIE: ("radarr", "/api/v3/movie"),
        MediaCategory.SHOW: ("sonarr", "/api/v3/series"),
    }

    def __init__(
        self,
        targets: dict[MediaCategory, DownloaderTarget],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            targets: Downloader target per category
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._targets = targets
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArrClient":
        return cls(
            targets={
                MediaCategory.MOVIE: settings.radarr,
                MediaCategory.SHOW: settings.sonarr,
            },
            timeout=settings.dispatch_timeout,
        )

    def target_for(self, category: MediaCategory) -> DownloaderTarget:
        return self._targets.get(category) or DownloaderTarget()

    @staticmethod
    def build_payload(target: DownloaderTarget, item: MediaItem) -> dict[str, Any]:
        """Item fields plus the target's library defaults, when configured."""
        payload = item.to_document()
        if target.quality_profile_id is not None:
            payload.setdefault("qualityProfileId", target.quality_profile_id)
        if target.root_folder_path:
            payload.setdefault("rootFolderPath", target.root_folder_path)
        return payload

    async def send(self, category: MediaCategory, item: MediaItem) -> bool:
        target = self.target_for(category)
        if not target.is_configured:
            return False

        service, path = self.SERVICES[category]
        url = f"{target.base_url.rstrip('/')}{path}"

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.post(
                    url,
                    json=self.build_payload(target, item),
                    headers={
                        "X-Api-Key": target.api_key,
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DispatchError(service, str(e), status_code=e.response.status_code)
        except httpx.HTTPError as e:
            raise DispatchError(service, str(e))

        return True


class FulfillmentDispatcher(IFulfillmentDispatcher):
    """
    Fire-and-forget wrapper around a downloader client.

    Each dispatch runs as its own asyncio task. Failures are logged and
    dropped; there is no retry.
    """

    def __init__(self, client: IDownloaderClient):
        self._client = client
        self._tasks: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """Number of dispatches still running."""
        return len(self._tasks)

    def dispatch(self, category: MediaCategory, item: MediaItem) -> asyncio.Task:
        task = asyncio.create_task(self._send(category, item))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _send(self, category: MediaCategory, item: MediaItem) -> bool:
        try:
            sent = await self._client.send(category, item)
        except DispatchError as e:
            logger.warning(
                f"Fulfillment failed for {category.value}/{item.id}: {e.message}"
            )
            return False

        if not sent:
            logger.debug(
                f"No downloader configured for {category.value}, skipping {item.id}"
            )
        return sent

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
