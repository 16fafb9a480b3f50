"""
Request ledger API endpoints.

Users submit requests with their session token; admins review the
ledger and approve, deny or clear blacklist entries.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_request_ledger
from api.middleware.auth import get_current_user, require_admin
from modules.admin.models import AdminPrincipal
from modules.auth.models import User
from shared.models import MediaCategory

from .exceptions import RequesterMismatchError
from .interfaces import IRequestLedger
from .models import (
    ApprovalDecision,
    ApprovalEntry,
    DenialDecision,
    LedgerSnapshot,
    RemovalResult,
    RequestOutcome,
    SubmitRequest,
)

router = APIRouter()
blacklist_router = APIRouter()


@router.get("", response_model=LedgerSnapshot)
async def get_ledger(
    admin: AdminPrincipal = Depends(require_admin),
    ledger: IRequestLedger = Depends(get_request_ledger),
) -> LedgerSnapshot:
    """Get pending requests, recent approvals and the blacklist."""
    return await ledger.snapshot()


@router.get("/approvals", response_model=list[ApprovalEntry])
async def get_recent_approvals(
    ledger: IRequestLedger = Depends(get_request_ledger),
) -> list[ApprovalEntry]:
    """Recent approvals, most recent first. Public feed for the home screen."""
    return await ledger.recent_approvals()


@router.post("", response_model=RequestOutcome)
async def submit_request(
    request: SubmitRequest,
    user: User = Depends(get_current_user),
    ledger: IRequestLedger = Depends(get_request_ledger),
) -> RequestOutcome:
    """
    Request a movie or show for the signed-in user.

    Returns status "approved" when the user's policy auto-approves,
    otherwise "pending".
    """
    if request.username and request.username != user.username:
        raise RequesterMismatchError(request.username, user.username)
    return await ledger.submit(user.username, request.category, request.item)


@router.post("/{category}/{media_id}/approve", response_model=ApprovalDecision)
async def approve_request(
    category: MediaCategory,
    media_id: str,
    admin: AdminPrincipal = Depends(require_admin),
    ledger: IRequestLedger = Depends(get_request_ledger),
) -> ApprovalDecision:
    """Approve a pending request and send it to the download manager."""
    entry = await ledger.approve(category, media_id, approved_by=admin.username)
    return ApprovalDecision(entry=entry)


@router.post("/{category}/{media_id}/deny", response_model=DenialDecision)
async def deny_request(
    category: MediaCategory,
    media_id: str,
    admin: AdminPrincipal = Depends(require_admin),
    ledger: IRequestLedger = Depends(get_request_ledger),
) -> DenialDecision:
    """Deny a pending request and blacklist it."""
    entry = await ledger.deny(category, media_id, denied_by=admin.username)
    return DenialDecision(entry=entry)


@blacklist_router.delete("/{category}/{media_id}", response_model=RemovalResult)
async def remove_blacklist_entry(
    category: MediaCategory,
    media_id: str,
    admin: AdminPrincipal = Depends(require_admin),
    ledger: IRequestLedger = Depends(get_request_ledger),
) -> RemovalResult:
    """Remove a blacklist entry. Succeeds even if the entry is absent."""
    await ledger.unblacklist(category, media_id)
    return RemovalResult()
