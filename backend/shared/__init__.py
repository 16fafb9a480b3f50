"""
Shared infrastructure for the Finearr backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- store: JSON document store
- exceptions: Base exception classes
- models: Shared media models

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import DownloaderTarget, PlexSettings, Settings, get_settings
from .exceptions import (
    FinearrError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import CamelModel, MediaCategory, MediaItem
from .store import JsonDocumentStore, UnknownDocumentError

__all__ = [
    "DownloaderTarget",
    "PlexSettings",
    "Settings",
    "get_settings",
    "FinearrError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "CamelModel",
    "MediaCategory",
    "MediaItem",
    "JsonDocumentStore",
    "UnknownDocumentError",
]
