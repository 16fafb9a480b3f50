"""
Fixtures for API tests.

The app runs against real services on a temporary document store. Only
the edges are faked: plex.tv (FakePlexClient) and the downloader
(a MagicMock dispatcher).
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_admin_guard,
    get_admin_service,
    get_permission_service,
    get_request_ledger,
    get_session_broker,
)
from modules.admin.service import AdminService
from modules.auth.models import PlexIdentity
from modules.auth.repository import UserRepository
from modules.auth.service import PlexSessionBroker
from modules.requests.repository import RequestRepository
from modules.requests.service import RequestLedger


@pytest.fixture
def session_broker(fake_plex, store) -> PlexSessionBroker:
    fake_plex.tokens["plex-alice"] = PlexIdentity(id="1001", username="alice")
    fake_plex.tokens["plex-bob"] = PlexIdentity(id="1002", username="bob")
    return PlexSessionBroker(fake_plex, UserRepository(store), default_background="/bg/default.jpg")


@pytest.fixture
def app(store, permission_service, mock_dispatcher, session_broker, admin_accounts, admin_guard):
    """Create a fresh app wired to test services."""
    app = create_app()
    ledger = RequestLedger(RequestRepository(store), permission_service, mock_dispatcher)
    admins = AdminService(admin_accounts, admin_guard)

    app.dependency_overrides[get_permission_service] = lambda: permission_service
    app.dependency_overrides[get_request_ledger] = lambda: ledger
    app.dependency_overrides[get_session_broker] = lambda: session_broker
    app.dependency_overrides[get_admin_guard] = lambda: admin_guard
    app.dependency_overrides[get_admin_service] = lambda: admins
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def login(client):
    """Sign a Plex user in and return their bearer headers."""

    def _login(plex_token: str = "plex-alice") -> dict[str, str]:
        response = client.post("/api/auth/plex/login", json={"plexToken": plex_token})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['sessionToken']}"}

    return _login
