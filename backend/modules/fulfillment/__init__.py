"""
Fulfillment module.

Forwards approved requests to the external download manager.

Public API:
- IDownloaderClient: Capability that sends one item downstream
- IFulfillmentDispatcher: Non-blocking dispatch interface
- ArrClient: Radarr/Sonarr implementation of IDownloaderClient
- FulfillmentDispatcher: Background-task implementation of IFulfillmentDispatcher
- DispatchError: Raised by downloader clients when a call fails
"""

from .exceptions import DispatchError
from .interfaces import IDownloaderClient, IFulfillmentDispatcher
from .service import ArrClient, FulfillmentDispatcher

__all__ = [
    "IDownloaderClient",
    "IFulfillmentDispatcher",
    "ArrClient",
    "FulfillmentDispatcher",
    "DispatchError",
]
