"""
Fulfillment module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class DispatchError(ExternalServiceError):
    """Raised when the download manager call fails."""

    def __init__(
        self,
        service: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            f"Dispatch to {service} failed: {message}",
            service=service,
            code="DISPATCH_FAILED",
            details={"status_code": status_code},
        )
