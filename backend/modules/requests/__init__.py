"""
Request ledger module.

Holds the pending, approvals and blacklist collections and enforces the
state machine between them.

Public API:
- IRequestLedger: Interface for ledger operations
- RequestLedger: Document-backed implementation
- RequestEntry, ApprovalEntry, BlacklistEntry: Entry snapshots
- RequestOutcome, LedgerSnapshot: Results
- Ledger exceptions: RequestNotFoundError, RequestPermissionDeniedError,
  RequesterMismatchError
"""

from .interfaces import IRequestLedger
from .models import (
    APPROVALS_LIMIT,
    ApprovalEntry,
    BlacklistEntry,
    LedgerSnapshot,
    RequestEntry,
    RequestOutcome,
    RequestStatus,
    SubmitRequest,
)
from .exceptions import (
    RequestNotFoundError,
    RequestPermissionDeniedError,
    RequesterMismatchError,
)
from .repository import RequestRepository
from .service import RequestLedger

__all__ = [
    # Interface
    "IRequestLedger",
    # Models
    "APPROVALS_LIMIT",
    "ApprovalEntry",
    "BlacklistEntry",
    "LedgerSnapshot",
    "RequestEntry",
    "RequestOutcome",
    "RequestStatus",
    "SubmitRequest",
    # Exceptions
    "RequestNotFoundError",
    "RequestPermissionDeniedError",
    "RequesterMismatchError",
    # Implementation
    "RequestRepository",
    "RequestLedger",
]
