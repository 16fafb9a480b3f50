"""Tests for request ledger and blacklist endpoints."""

import pytest

MOVIE = {"id": "tt0111161", "title": "The Shawshank Redemption", "year": 1994}
SHOW = {"id": "81189", "title": "Breaking Bad", "year": "2008"}


@pytest.fixture
def submit(client, login):
    """Submit a request as a signed-in user."""

    def _submit(category: str = "movie", item: dict = MOVIE, plex_token: str = "plex-alice"):
        return client.post(
            "/api/requests",
            json={"category": category, "item": item},
            headers=login(plex_token),
        )

    return _submit


class TestSubmit:
    def test_pending(self, submit, client, admin_headers, mock_dispatcher):
        response = submit()

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "pending"
        assert data["entry"]["requestedBy"] == "alice"
        assert data["entry"]["id"] == MOVIE["id"]
        mock_dispatcher.dispatch.assert_not_called()

        ledger = client.get("/api/requests", headers=admin_headers).json()
        assert [e["id"] for e in ledger["requests"]["movies"]] == [MOVIE["id"]]

    def test_auto_approved(self, submit, client, admin_headers, mock_dispatcher):
        client.put(
            "/api/permissions",
            json={"users": {"alice": {"autoApprove": True}}},
            headers=admin_headers,
        )

        response = submit(category="show", item=SHOW)

        data = response.json()
        assert data["status"] == "approved"
        assert data["entry"]["autoApproved"] is True
        assert data["entry"]["approvedAt"]
        mock_dispatcher.dispatch.assert_called_once()

        approvals = client.get("/api/requests/approvals").json()
        assert [e["id"] for e in approvals] == [SHOW["id"]]

    def test_permission_denied(self, submit, client, admin_headers):
        client.put(
            "/api/permissions",
            json={"defaults": {"canRequestMovies": False}},
            headers=admin_headers,
        )

        response = submit()

        assert response.status_code == 403
        assert response.json()["error"] == "REQUEST_PERMISSION_DENIED"
        ledger = client.get("/api/requests", headers=admin_headers).json()
        assert ledger["requests"]["movies"] == []

    def test_requires_user_session(self, client):
        response = client.post("/api/requests", json={"category": "movie", "item": MOVIE})

        assert response.status_code == 401

    def test_username_must_match_session(self, client, login):
        response = client.post(
            "/api/requests",
            json={"category": "movie", "item": MOVIE, "username": "bob"},
            headers=login("plex-alice"),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "REQUESTER_MISMATCH"

    def test_missing_item_id(self, client, login):
        response = client.post(
            "/api/requests",
            json={"category": "movie", "item": {"title": "No id"}},
            headers=login(),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_unknown_category(self, client, login):
        response = client.post(
            "/api/requests",
            json={"category": "music", "item": MOVIE},
            headers=login(),
        )

        assert response.status_code == 400


class TestDecisions:
    def test_approve(self, submit, client, admin_headers, mock_dispatcher):
        submit()

        response = client.post(f"/api/requests/movie/{MOVIE['id']}/approve", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "approved"
        assert data["entry"]["approvedBy"] == "admin"
        assert data["entry"]["requestedBy"] == "alice"
        mock_dispatcher.dispatch.assert_called_once()

        ledger = client.get("/api/requests", headers=admin_headers).json()
        assert ledger["requests"]["movies"] == []
        assert [e["id"] for e in ledger["approvals"]] == [MOVIE["id"]]

    def test_approve_unknown(self, client, admin_headers):
        response = client.post("/api/requests/movie/missing/approve", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "REQUEST_NOT_FOUND"

    def test_approve_then_deny(self, submit, client, admin_headers):
        submit()
        client.post(f"/api/requests/movie/{MOVIE['id']}/approve", headers=admin_headers)

        response = client.post(f"/api/requests/movie/{MOVIE['id']}/deny", headers=admin_headers)

        assert response.status_code == 404

    def test_deny_and_unblacklist(self, submit, client, admin_headers):
        submit(category="show", item=SHOW)

        response = client.post(f"/api/requests/show/{SHOW['id']}/deny", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "denied"
        assert response.json()["entry"]["deniedBy"] == "admin"
        ledger = client.get("/api/requests", headers=admin_headers).json()
        assert [e["id"] for e in ledger["blacklist"]["shows"]] == [SHOW["id"]]

        response = client.delete(f"/api/blacklist/show/{SHOW['id']}", headers=admin_headers)

        assert response.json() == {"status": "removed"}
        ledger = client.get("/api/requests", headers=admin_headers).json()
        assert ledger["blacklist"]["shows"] == []

    def test_unblacklist_is_idempotent(self, client, admin_headers):
        response = client.delete("/api/blacklist/movie/never-denied", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"status": "removed"}

    def test_invalid_category_in_path(self, client, admin_headers):
        response = client.post("/api/requests/music/1/approve", headers=admin_headers)

        assert response.status_code == 400


class TestApprovalsFeed:
    def test_public(self, client):
        response = client.get("/api/requests/approvals")

        assert response.status_code == 200
        assert response.json() == []
