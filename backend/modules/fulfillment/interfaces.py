"""
Fulfillment module interfaces.

IDownloaderClient is the capability that actually talks to a download
manager. IFulfillmentDispatcher wraps it in fire-and-forget scheduling so
ledger transitions never wait on, or fail because of, the downloader.
"""

import asyncio
from typing import Optional, Protocol, runtime_checkable

from shared.models import MediaCategory, MediaItem


@runtime_checkable
class IDownloaderClient(Protocol):
    """Interface for sending an item to the category's download manager."""

    async def send(self, category: MediaCategory, item: MediaItem) -> bool:
        """
        Forward an item to the downstream target.

        Args:
            category: Picks the target (Radarr for movies, Sonarr for shows)
            item: Media item to add

        Returns:
            True if the item was sent, False if the target is unconfigured

        Raises:
            DispatchError: If the downstream call fails
        """
        ...


@runtime_checkable
class IFulfillmentDispatcher(Protocol):
    """Interface for non-blocking fulfillment."""

    def dispatch(self, category: MediaCategory, item: MediaItem) -> Optional[asyncio.Task]:
        """
        Schedule an item for fulfillment and return immediately.

        Failures are logged, never raised to the caller.
        """
        ...

    async def drain(self) -> None:
        """Wait for all in-flight dispatches to finish."""
        ...
