"""
Request ledger service implementation.

Turns a user request into an immediate approval or a pending request,
and applies admin approve / deny / unblacklist decisions.

Duplicate submissions are not deduplicated and re-requesting a
blacklisted item is not blocked.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.models import MediaCategory, MediaItem

from modules.fulfillment.interfaces import IFulfillmentDispatcher
from modules.permissions.interfaces import IPermissionService

from .exceptions import RequestNotFoundError, RequestPermissionDeniedError
from .interfaces import IRequestLedger
from .models import (
    APPROVALS_LIMIT,
    ApprovalEntry,
    BlacklistEntry,
    LedgerSnapshot,
    RequestEntry,
    RequestOutcome,
    RequestStatus,
)
from .repository import RequestRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestLedger(IRequestLedger):
    """
    Ledger over the pending, approvals and blacklist collections.

    Every transition runs inside one repository transaction, so concurrent
    submissions and admin decisions are serialized per document.
    """

    def __init__(
        self,
        repository: RequestRepository,
        permissions: IPermissionService,
        dispatcher: IFulfillmentDispatcher,
        approvals_limit: int = APPROVALS_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._repository = repository
        self._permissions = permissions
        self._dispatcher = dispatcher
        self._approvals_limit = approvals_limit
        self._clock = clock

    async def submit(
        self,
        username: str,
        category: MediaCategory,
        item: MediaItem,
    ) -> RequestOutcome:
        policy = await self._permissions.evaluate(username)
        if not policy.can_request(category):
            raise RequestPermissionDeniedError(username, category)

        now = self._clock()
        entry = RequestEntry.from_item(item, category, username, now)

        if policy.auto_approve:
            approval = ApprovalEntry.from_request(entry, approved_at=now, auto_approved=True)
            async with self._repository.open("approvals") as state:
                state.push_approval(approval, self._approvals_limit)
            logger.info(f"Auto-approved {category.value}/{item.id} for {username}")
            self._dispatcher.dispatch(category, item)
            return RequestOutcome(status=RequestStatus.APPROVED, entry=approval)

        async with self._repository.open("requests") as state:
            state.push_pending(entry)
        logger.info(f"Queued {category.value}/{item.id} for {username}")
        return RequestOutcome(status=RequestStatus.PENDING, entry=entry)

    async def approve(
        self,
        category: MediaCategory,
        media_id: str,
        approved_by: Optional[str] = None,
    ) -> ApprovalEntry:
        async with self._repository.open("requests", "approvals") as state:
            entry = state.pop_pending(category, media_id)
            if entry is None:
                raise RequestNotFoundError(category, media_id)
            approval = ApprovalEntry.from_request(
                entry,
                approved_at=self._clock(),
                approved_by=approved_by,
            )
            state.push_approval(approval, self._approvals_limit)

        logger.info(f"Approved {category.value}/{media_id} (by {approved_by})")
        self._dispatcher.dispatch(category, approval.media_item())
        return approval

    async def deny(
        self,
        category: MediaCategory,
        media_id: str,
        denied_by: Optional[str] = None,
    ) -> BlacklistEntry:
        async with self._repository.open("requests", "blacklist") as state:
            entry = state.pop_pending(category, media_id)
            if entry is None:
                raise RequestNotFoundError(category, media_id)
            denied = BlacklistEntry.from_request(
                entry,
                denied_at=self._clock(),
                denied_by=denied_by,
            )
            state.push_blacklist(denied)

        logger.info(f"Denied {category.value}/{media_id} (by {denied_by})")
        return denied

    async def unblacklist(self, category: MediaCategory, media_id: str) -> None:
        async with self._repository.open("blacklist") as state:
            removed = state.remove_blacklisted(category, media_id)
        if removed:
            logger.info(f"Removed {category.value}/{media_id} from blacklist")

    async def snapshot(self) -> LedgerSnapshot:
        return await self._repository.snapshot()

    async def recent_approvals(self) -> list[ApprovalEntry]:
        return await self._repository.approvals()
