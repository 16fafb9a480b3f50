"""
Request ledger interface.

The API layer depends on IRequestLedger for every request lifecycle
transition: submit, approve, deny and blacklist removal.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import MediaCategory, MediaItem

from .models import (
    ApprovalEntry,
    BlacklistEntry,
    LedgerSnapshot,
    RequestOutcome,
)


@runtime_checkable
class IRequestLedger(Protocol):
    """
    Interface for the pending / approvals / blacklist state machine.

    Pending -> Approvals (terminal history) or Pending -> Blacklist
    (terminal until explicitly removed). Nothing re-enters Pending.
    """

    async def submit(
        self,
        username: str,
        category: MediaCategory,
        item: MediaItem,
    ) -> RequestOutcome:
        """
        Submit a new request.

        Args:
            username: Requesting user
            category: movie or show
            item: Media item to request

        Returns:
            RequestOutcome with status "approved" (auto-approve policy) or
            "pending"

        Raises:
            RequestPermissionDeniedError: If the user may not request the category
        """
        ...

    async def approve(
        self,
        category: MediaCategory,
        media_id: str,
        approved_by: Optional[str] = None,
    ) -> ApprovalEntry:
        """
        Move a pending request into approvals and hand it to fulfillment.

        Raises:
            RequestNotFoundError: If no pending request matches
        """
        ...

    async def deny(
        self,
        category: MediaCategory,
        media_id: str,
        denied_by: Optional[str] = None,
    ) -> BlacklistEntry:
        """
        Move a pending request into the blacklist.

        Raises:
            RequestNotFoundError: If no pending request matches
        """
        ...

    async def unblacklist(self, category: MediaCategory, media_id: str) -> None:
        """Remove a blacklist entry. No-op if absent."""
        ...

    async def snapshot(self) -> LedgerSnapshot:
        """Read all three collections."""
        ...

    async def recent_approvals(self) -> list[ApprovalEntry]:
        """Read the approvals history, most recent first."""
        ...
