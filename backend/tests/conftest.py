"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

from api.dependencies import reset_container
from modules.admin.repository import AdminRepository
from modules.admin.sessions import AdminSessionGuard
from modules.auth.models import PinStatus, PlexIdentity, PlexPin
from modules.auth.exceptions import PinNotFoundError
from modules.fulfillment.interfaces import IFulfillmentDispatcher
from modules.permissions.repository import PermissionRepository
from modules.permissions.service import PermissionService
from shared.config import get_settings
from shared.models import MediaItem
from shared.store import JsonDocumentStore


TEST_ADMIN_SECRET = "test-admin-secret-for-testing-only"


class FakePlexClient:
    """
    In-memory Plex identity provider.

    tokens maps a Plex token to the identity it resolves to; pins maps a
    PIN id to the auth token it reports (None until "completed").
    """

    def __init__(self) -> None:
        self.tokens: dict[str, PlexIdentity] = {}
        self.pins: dict[str, Optional[str]] = {}
        self.account_calls = 0

    async def create_pin(self) -> PlexPin:
        pin_id = str(len(self.pins) + 1)
        self.pins[pin_id] = None
        return PlexPin(
            id=pin_id,
            code=f"CODE{pin_id}",
            auth_url=f"https://app.plex.tv/auth#?code=CODE{pin_id}",
            expires_in=1800,
        )

    async def get_pin(self, pin_id: str) -> PinStatus:
        if pin_id not in self.pins:
            raise PinNotFoundError(pin_id)
        return PinStatus(auth_token=self.pins[pin_id])

    async def get_account(self, plex_token: str) -> Optional[PlexIdentity]:
        self.account_calls += 1
        return self.tokens.get(plex_token)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and settings cache around each test."""
    reset_container()
    get_settings.cache_clear()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def store(tmp_path: Path) -> JsonDocumentStore:
    """A document store rooted in a fresh temporary directory."""
    return JsonDocumentStore(tmp_path / "data")


@pytest.fixture
def permission_service(store: JsonDocumentStore) -> PermissionService:
    return PermissionService(PermissionRepository(store))


@pytest.fixture
def mock_dispatcher() -> MagicMock:
    """Dispatcher that records calls instead of starting tasks."""
    return MagicMock(spec=IFulfillmentDispatcher)


@pytest.fixture
def fake_plex() -> FakePlexClient:
    return FakePlexClient()


@pytest.fixture
def admin_accounts(store: JsonDocumentStore) -> AdminRepository:
    return AdminRepository(store)


@pytest.fixture
def admin_guard(admin_accounts: AdminRepository) -> AdminSessionGuard:
    return AdminSessionGuard(admin_accounts, secret=TEST_ADMIN_SECRET)


@pytest.fixture
def admin_token(admin_guard: AdminSessionGuard) -> str:
    """A valid session token for the seeded "admin" account."""
    return admin_guard.issue("admin").token


@pytest.fixture
def movie() -> MediaItem:
    return MediaItem(id="tt0111161", title="The Shawshank Redemption", year=1994)


@pytest.fixture
def show() -> MediaItem:
    return MediaItem(id="81189", title="Breaking Bad", year="2008")
