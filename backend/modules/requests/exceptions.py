"""
Request ledger exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError
from shared.models import MediaCategory


class RequestNotFoundError(NotFoundError):
    """Raised when no pending request matches (category, id)."""

    def __init__(self, category: MediaCategory, media_id: str):
        super().__init__(
            f"Request not found: {category.value}/{media_id}",
            code="REQUEST_NOT_FOUND",
            details={"category": category.value, "id": media_id},
        )


class RequestPermissionDeniedError(AuthorizationError):
    """Raised when the user's policy forbids requesting the category."""

    def __init__(self, username: str, category: MediaCategory):
        super().__init__(
            f"User does not have permission to request {category.collection_key}",
            code="REQUEST_PERMISSION_DENIED",
            details={"username": username, "category": category.value},
        )


class RequesterMismatchError(AuthorizationError):
    """Raised when a request names a different user than the session belongs to."""

    def __init__(self, username: str, session_username: str):
        super().__init__(
            "Requests can only be made for the signed-in user",
            code="REQUESTER_MISMATCH",
            details={"username": username, "session_username": session_username},
        )
