"""Tests for the request ledger repository."""

import json
from datetime import datetime, timezone

import pytest

from modules.requests.models import ApprovalEntry, BlacklistEntry, RequestEntry
from modules.requests.repository import RequestRepository
from shared.models import MediaCategory, MediaItem

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def entry(media_id: str, category: MediaCategory = MediaCategory.MOVIE) -> RequestEntry:
    return RequestEntry.from_item(MediaItem(id=media_id), category, "alice", NOW)


class TestLedgerState:
    @pytest.mark.asyncio
    async def test_pop_pending_returns_none_when_absent(self, store):
        repository = RequestRepository(store)

        async with repository.open("requests") as state:
            assert state.pop_pending(MediaCategory.MOVIE, "missing") is None

    @pytest.mark.asyncio
    async def test_push_approval_truncates(self, store):
        repository = RequestRepository(store)

        async with repository.open("approvals") as state:
            for n in range(5):
                state.push_approval(ApprovalEntry.from_request(entry(str(n)), NOW), limit=3)

        approvals = await repository.approvals()
        assert [a.id for a in approvals] == ["4", "3", "2"]

    @pytest.mark.asyncio
    async def test_remove_blacklisted_counts(self, store):
        repository = RequestRepository(store)

        async with repository.open("blacklist") as state:
            state.push_blacklist(BlacklistEntry.from_request(entry("1"), NOW))
            state.push_blacklist(BlacklistEntry.from_request(entry("1"), NOW))

        async with repository.open("blacklist") as state:
            assert state.remove_blacklisted(MediaCategory.MOVIE, "1") == 2
            assert state.remove_blacklisted(MediaCategory.MOVIE, "1") == 0


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_reads_legacy_documents(self, store):
        """Documents written with only some keys still load."""
        store.data_dir.mkdir(parents=True)
        store.path_for("requests").write_text(json.dumps({
            "movies": [{
                "id": "tt1",
                "title": "Movie",
                "category": "movie",
                "requestedBy": "alice",
                "requestedAt": "2024-05-01T12:00:00Z",
            }],
        }))
        repository = RequestRepository(store)

        snapshot = await repository.snapshot()

        assert snapshot.requests.movies[0].requested_by == "alice"
        assert snapshot.requests.shows == []
        assert snapshot.approvals == []

    @pytest.mark.asyncio
    async def test_reads_type_tagged_documents(self, store):
        """Entries tagged with "type" instead of "category" still load."""
        store.data_dir.mkdir(parents=True)
        store.path_for("requests").write_text(json.dumps({
            "movies": [],
            "shows": [{
                "id": "81189",
                "title": "Breaking Bad",
                "type": "show",
                "requestedBy": "bob",
                "requestedAt": "2024-05-01T12:00:00.000Z",
            }],
        }))
        store.path_for("approvals").write_text(json.dumps([{
            "id": "tt1",
            "type": "movie",
            "requestedBy": "alice",
            "requestedAt": "2024-05-01T12:00:00.000Z",
        }]))
        store.path_for("blacklist").write_text(json.dumps({
            "movies": [{
                "id": "tt2",
                "type": "movie",
                "requestedBy": "alice",
                "requestedAt": "2024-05-01T12:00:00.000Z",
                "deniedAt": "2024-05-02T12:00:00.000Z",
            }],
            "shows": [],
        }))
        repository = RequestRepository(store)

        snapshot = await repository.snapshot()

        assert snapshot.requests.shows[0].category == MediaCategory.SHOW
        assert snapshot.approvals[0].category == MediaCategory.MOVIE
        assert snapshot.approvals[0].approved_at is None
        assert snapshot.blacklist.movies[0].category == MediaCategory.MOVIE

        async with repository.open("requests") as state:
            popped = state.pop_pending(MediaCategory.SHOW, "81189")

        assert popped.category == MediaCategory.SHOW
        assert popped.to_document()["category"] == "show"
        assert "type" not in popped.to_document()
