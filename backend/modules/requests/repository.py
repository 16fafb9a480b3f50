"""
Request ledger repository.

The ledger is stored as three documents:
- requests:  {"movies": [...], "shows": [...]}  pending requests
- approvals: [...]                              most recent first
- blacklist: {"movies": [...], "shows": [...]}  denied requests

Mutations happen inside open(), which holds the document locks for the
whole read-modify-write.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from shared.models import MediaCategory
from shared.repository import BaseRepository

from .models import (
    ApprovalEntry,
    Blacklist,
    BlacklistEntry,
    LedgerSnapshot,
    PendingRequests,
    RequestEntry,
)


class LedgerState:
    """Mutable view over the raw ledger documents loaded in one transaction."""

    def __init__(self, docs: dict[str, Any]) -> None:
        self._docs = docs

    def _by_category(self, name: str, category: MediaCategory) -> list[dict]:
        document = self._docs[name]
        return document.setdefault(category.collection_key, [])

    def pending(self, category: MediaCategory) -> list[dict]:
        return self._by_category("requests", category)

    def blacklist(self, category: MediaCategory) -> list[dict]:
        return self._by_category("blacklist", category)

    @property
    def approvals(self) -> list[dict]:
        return self._docs["approvals"]

    def push_pending(self, entry: RequestEntry) -> None:
        self.pending(entry.category).append(entry.to_document())

    def pop_pending(self, category: MediaCategory, media_id: str) -> Optional[RequestEntry]:
        """Remove and return the first pending request with this id."""
        pending = self.pending(category)
        for index, raw in enumerate(pending):
            if raw.get("id") == media_id:
                return RequestEntry.model_validate(pending.pop(index))
        return None

    def push_approval(self, entry: ApprovalEntry, limit: int) -> None:
        """Prepend to approvals and evict the oldest beyond limit."""
        approvals = [entry.to_document(), *self.approvals]
        self._docs["approvals"] = approvals[:limit]

    def push_blacklist(self, entry: BlacklistEntry) -> None:
        self.blacklist(entry.category).append(entry.to_document())

    def remove_blacklisted(self, category: MediaCategory, media_id: str) -> int:
        """Remove every blacklist entry with this id, returning how many were removed."""
        current = self.blacklist(category)
        kept = [raw for raw in current if raw.get("id") != media_id]
        self._docs["blacklist"][category.collection_key] = kept
        return len(current) - len(kept)


class RequestRepository(BaseRepository[RequestEntry]):
    """Reads and mutates the pending, approvals and blacklist documents."""

    DEFAULTS = {
        "requests": {"movies": [], "shows": []},
        "approvals": [],
        "blacklist": {"movies": [], "shows": []},
    }

    @asynccontextmanager
    async def open(self, *documents: str) -> AsyncIterator[LedgerState]:
        """
        Open a serialized transaction over the named ledger documents.

        Args:
            documents: Any of "requests", "approvals", "blacklist"
        """
        async with self._store.transaction(*documents) as docs:
            yield LedgerState(docs)

    async def snapshot(self) -> LedgerSnapshot:
        requests = await self._store.read("requests")
        approvals = await self._store.read("approvals")
        blacklist = await self._store.read("blacklist")
        return LedgerSnapshot(
            requests=PendingRequests.model_validate(requests),
            approvals=[ApprovalEntry.model_validate(raw) for raw in approvals],
            blacklist=Blacklist.model_validate(blacklist),
        )

    async def approvals(self) -> list[ApprovalEntry]:
        approvals = await self._store.read("approvals")
        return [ApprovalEntry.model_validate(raw) for raw in approvals]
