"""
Flat JSON document storage.

Each document (users, admins, permissions, requests, approvals, blacklist)
lives in its own file under the data directory. Documents are always read
and written whole, so every mutation goes through transaction(), which
holds a per-document lock for the full read-modify-write cycle.
"""

import asyncio
import copy
import json
import logging
import os
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Optional

logger = logging.getLogger(__name__)


class UnknownDocumentError(KeyError):
    """Raised when a document has no registered default."""


class JsonDocumentStore:
    """
    Lock-guarded store of whole JSON documents.

    Missing or unreadable files fall back to the registered default for the
    document. Writes go to a temporary file first and are moved into place
    with os.replace, so readers never observe a partial document.
    """

    def __init__(
        self,
        data_dir: Path,
        defaults: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            data_dir: Directory holding one <name>.json file per document.
            defaults: Optional mapping of document name to default value.
        """
        self._data_dir = Path(data_dir)
        self._defaults: dict[str, Any] = dict(defaults or {})
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def register_default(self, name: str, value: Any) -> None:
        """Register the fallback value for a document (first registration wins)."""
        self._defaults.setdefault(name, value)

    def path_for(self, name: str) -> Path:
        return self._data_dir / f"{name}.json"

    def _default(self, name: str) -> Any:
        if name not in self._defaults:
            raise UnknownDocumentError(name)
        return copy.deepcopy(self._defaults[name])

    def _load(self, name: str) -> Any:
        path = self.path_for(name)
        try:
            with path.open(encoding="utf-8") as fh:
                value = json.load(fh)
        except FileNotFoundError:
            return self._default(name)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {path}, using defaults: {e}")
            return self._default(name)

        if value is None:
            return self._default(name)
        return value

    def _dump(self, name: str, value: Any) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(name)
        tmp_path = path.with_name(f"{path.name}.tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(value, fh, indent=2)
        os.replace(tmp_path, path)

    def _lock(self, name: str) -> asyncio.Lock:
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        return lock

    async def read(self, name: str) -> Any:
        """Read a snapshot of a document without taking its lock."""
        return await asyncio.to_thread(self._load, name)

    @asynccontextmanager
    async def transaction(self, *names: str) -> AsyncIterator[dict[str, Any]]:
        """
        Serialize a read-modify-write over one or more documents.

        Locks are taken in sorted name order so overlapping transactions
        cannot deadlock. The yielded dict maps each name to its loaded
        document; mutate the documents in place (or reassign the key) and
        they are written back when the block exits cleanly. If the block
        raises, nothing is written.

        Usage:
            async with store.transaction("requests", "approvals") as docs:
                docs["approvals"].insert(0, entry)
        """
        ordered = sorted(set(names))
        async with AsyncExitStack() as stack:
            for name in ordered:
                await stack.enter_async_context(self._lock(name))

            docs = {}
            for name in ordered:
                docs[name] = await asyncio.to_thread(self._load, name)

            yield docs

            for name in ordered:
                await asyncio.to_thread(self._dump, name, docs[name])
