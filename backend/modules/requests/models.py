"""
Request ledger data models.

Entries are immutable snapshots: an approval or blacklist entry copies the
pending request it came from and adds the decision context.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import AliasChoices, Field

from shared.models import CamelModel, MediaCategory, MediaItem


APPROVALS_LIMIT = 20


class RequestStatus(str, Enum):
    """Outcome of a ledger transition."""

    APPROVED = "approved"
    PENDING = "pending"
    DENIED = "denied"
    REMOVED = "removed"


class RequestEntry(MediaItem):
    """A media request awaiting (or past) an admin decision."""

    category: MediaCategory = Field(
        ...,
        validation_alias=AliasChoices("category", "type"),
        description="movie or show; older documents store it as \"type\"",
    )
    requested_by: str = Field(..., description="Requesting username")
    requested_at: datetime = Field(..., description="When the request was made")

    @classmethod
    def from_item(
        cls,
        item: MediaItem,
        category: MediaCategory,
        requested_by: str,
        requested_at: datetime,
    ) -> "RequestEntry":
        data = item.to_document()
        data.update(
            category=category,
            requestedBy=requested_by,
            requestedAt=requested_at,
        )
        return cls.model_validate(data)

    def media_item(self) -> MediaItem:
        """The requested item without ledger bookkeeping fields."""
        ledger_fields = set(type(self).model_fields) - set(MediaItem.model_fields)
        return MediaItem.model_validate(
            self.model_dump(mode="json", by_alias=True, exclude=ledger_fields)
        )


class ApprovalEntry(RequestEntry):
    """Snapshot of an approved request."""

    approved_at: Optional[datetime] = Field(
        None, description="When the request was approved, None in older documents"
    )
    approved_by: Optional[str] = Field(None, description="Approving admin, None when automatic")
    auto_approved: bool = Field(default=False, description="Approved by the user's policy")

    @classmethod
    def from_request(
        cls,
        entry: RequestEntry,
        approved_at: datetime,
        approved_by: Optional[str] = None,
        auto_approved: bool = False,
    ) -> "ApprovalEntry":
        data = entry.to_document()
        data.update(
            approvedAt=approved_at,
            approvedBy=approved_by,
            autoApproved=auto_approved,
        )
        return cls.model_validate(data)


class BlacklistEntry(RequestEntry):
    """Snapshot of a denied request."""

    denied_at: datetime = Field(..., description="When the request was denied")
    denied_by: Optional[str] = Field(None, description="Denying admin")

    @classmethod
    def from_request(
        cls,
        entry: RequestEntry,
        denied_at: datetime,
        denied_by: Optional[str] = None,
    ) -> "BlacklistEntry":
        data = entry.to_document()
        data.update(deniedAt=denied_at, deniedBy=denied_by)
        return cls.model_validate(data)


class SubmitRequest(CamelModel):
    """Body of a new request."""

    category: MediaCategory
    item: MediaItem
    username: Optional[str] = Field(
        None,
        description="Requesting username; must match the session user when given",
    )


class RequestOutcome(CamelModel):
    """Result of a submission: approved immediately or left pending."""

    status: RequestStatus
    entry: Union[ApprovalEntry, RequestEntry]


class ApprovalDecision(CamelModel):
    status: RequestStatus = RequestStatus.APPROVED
    entry: ApprovalEntry


class DenialDecision(CamelModel):
    status: RequestStatus = RequestStatus.DENIED
    entry: BlacklistEntry


class RemovalResult(CamelModel):
    status: RequestStatus = RequestStatus.REMOVED


class PendingRequests(CamelModel):
    """Pending requests per category."""

    movies: list[RequestEntry] = Field(default_factory=list)
    shows: list[RequestEntry] = Field(default_factory=list)


class Blacklist(CamelModel):
    """Denied requests per category."""

    movies: list[BlacklistEntry] = Field(default_factory=list)
    shows: list[BlacklistEntry] = Field(default_factory=list)


class LedgerSnapshot(CamelModel):
    """Point-in-time view of all three collections."""

    requests: PendingRequests
    approvals: list[ApprovalEntry]
    blacklist: Blacklist
