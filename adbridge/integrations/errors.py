"""Error taxonomy shared by API clients and distributors.

Clients raise these; distributors catch everything at their boundary and fold
it into ``PlatformCampaignResult.error``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

VALIDATION_ERROR = "VALIDATION_ERROR"
CONNECTION_ERROR = "CONNECTION_ERROR"
REMOTE_REJECTION = "REMOTE_REJECTION"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


class DistributionError(Exception):
    code: str = UNKNOWN_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class CampaignValidationError(DistributionError):
    """Local pre-flight rejection. Never reaches the network."""

    code = VALIDATION_ERROR

    def __init__(self, errors: Sequence[str], message: str = "Campaign validation failed") -> None:
        super().__init__(message, {"errors": list(errors)})
        self.errors: List[str] = list(errors)


class PlatformConnectionError(DistributionError):
    """Credentials rejected or platform unreachable."""

    code = CONNECTION_ERROR

    def __init__(self, platform: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.platform = platform


class RemoteRejectionError(DistributionError):
    """The platform answered a creation/update step with a non-success status or code."""

    code = REMOTE_REJECTION

    def __init__(
        self,
        platform: str,
        step: str,
        message: str,
        *,
        status: Optional[int] = None,
        remote_code: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.platform = platform
        self.step = step
        self.status = status
        self.remote_code = remote_code
        self.details.setdefault("step", step)
        if status is not None:
            self.details.setdefault("status", status)
        if remote_code is not None:
            self.details.setdefault("remote_code", remote_code)
