"""Tests for permission policy endpoints."""


class TestPermissions:
    def test_get_defaults(self, client, admin_headers):
        response = client.get("/api/permissions", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "defaults": {"canRequestMovies": True, "canRequestShows": True, "autoApprove": False},
            "users": {},
        }

    def test_put_merges(self, client, admin_headers):
        client.put(
            "/api/permissions",
            json={"users": {"alice": {"autoApprove": True}}},
            headers=admin_headers,
        )

        response = client.put(
            "/api/permissions",
            json={"defaults": {"canRequestShows": False}},
            headers=admin_headers,
        )

        data = response.json()
        assert data["defaults"]["canRequestShows"] is False
        assert data["defaults"]["canRequestMovies"] is True
        assert data["users"]["alice"]["autoApprove"] is True

    def test_put_rejects_non_boolean(self, client, admin_headers):
        response = client.put(
            "/api/permissions",
            json={"defaults": {"autoApprove": "sometimes"}},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_delete_user_override(self, client, admin_headers):
        client.put(
            "/api/permissions",
            json={"users": {"alice": {"canRequestMovies": False}}},
            headers=admin_headers,
        )

        response = client.delete("/api/permissions/users/alice", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["users"] == {}
