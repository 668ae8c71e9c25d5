"""Distributor template: validate -> (probe) -> create -> uniform result.

``distribute`` is total: every failure, typed or not, is folded into
``PlatformCampaignResult.error`` and the attempt ends in a terminal state.
There is no retry state; a failed attempt is resubmitted by the caller.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type
from urllib.parse import urlparse

from adbridge.config.thresholds import AUDIENCE_LIMITS
from adbridge.infra.time_utc import now_utc
from adbridge.infra.tracer import Tracer, guarded
from adbridge.integrations.errors import (
    UNKNOWN_ERROR,
    CampaignValidationError,
    DistributionError,
    PlatformConnectionError,
)
from adbridge.integrations.http_client import HttpTransport
from adbridge.models import (
    CampaignStatus,
    Platform,
    PlatformCampaignResult,
    ResultError,
    UnifiedCampaignData,
    ValidationReport,
)
from adbridge.platforms import get_transformer
from adbridge.platforms.base import PlatformApiClient


class DistributionState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    REJECTED = "rejected"
    CONNECTING = "connecting"
    CONNECTION_FAILED = "connection_failed"
    CREATING = "creating"
    CREATED = "created"
    FAILED = "failed"


TERMINAL_STATES = frozenset(
    {
        DistributionState.REJECTED,
        DistributionState.CONNECTION_FAILED,
        DistributionState.CREATED,
        DistributionState.FAILED,
    }
)

# where a failure lands depending on the step it interrupted
_FAILURE_STATE = {
    DistributionState.PENDING: DistributionState.REJECTED,
    DistributionState.VALIDATING: DistributionState.REJECTED,
    DistributionState.CONNECTING: DistributionState.CONNECTION_FAILED,
    DistributionState.CREATING: DistributionState.FAILED,
}

ClientFactory = Callable[[Any], Any]
Clock = Callable[[], datetime]


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class CampaignDistributor:
    """Orchestration boundary for one platform.

    Subclasses set ``platform``/``label``/``client_class``, add their rules in
    ``_check_platform`` and flatten the client's nested return in ``_flatten``.
    Tests inject ``client_factory`` to stub the API client and ``clock`` to pin
    "now" for schedule checks.
    """

    platform: Platform
    label: str = "Platform"
    client_class: Type[PlatformApiClient]
    probe_before_create: bool = False

    def __init__(
        self,
        *,
        client_factory: Optional[ClientFactory] = None,
        tracer: Optional[Tracer] = None,
        clock: Optional[Clock] = None,
        http: Optional[HttpTransport] = None,
    ) -> None:
        self.tracer: Tracer = guarded(tracer)
        self.clock: Clock = clock or now_utc
        self.http = http
        self._client_factory = client_factory
        self.transformer = get_transformer(self.platform)

    def make_client(self, credentials: Any) -> Any:
        if self._client_factory is not None:
            return self._client_factory(credentials)
        return self.client_class(credentials, http=self.http, tracer=self.tracer)

    # ------------------------------------------------------------------
    # validation
    # ------------------------------------------------------------------

    def validate_campaign_data(self, data: UnifiedCampaignData) -> ValidationReport:
        report = ValidationReport()
        self._check_common(data, report)
        self._check_platform(data, report)
        targeting = self.transformer.transform(data.targeting)
        report.extend(self.transformer.validate(targeting))
        return report

    def _check_common(self, data: UnifiedCampaignData, report: ValidationReport) -> None:
        if not data.name or not data.name.strip():
            report.error("Campaign name is required")
        if data.budget.amount <= 0:
            report.error("Valid budget amount is required")

        if data.schedule.start_date >= data.schedule.end_date:
            report.error("End date must be after start date")

        t = data.targeting
        if not t.locations:
            report.error("At least one location is required")
        if t.age_min < AUDIENCE_LIMITS.min_age:
            report.error(f"Minimum age must be at least {AUDIENCE_LIMITS.min_age}")
        if t.age_max > AUDIENCE_LIMITS.max_age:
            report.error(f"Maximum age cannot exceed {AUDIENCE_LIMITS.max_age}")
        if t.age_min >= t.age_max:
            report.error("Minimum age must be less than maximum age")

        creative = data.creative
        if not creative.headline.strip():
            report.error("Ad headline is required")
        if not creative.primary_text.strip():
            report.error("Ad primary text is required")
        if not creative.media:
            report.error("At least one media item is required")

        url = data.creative.destination_url
        if not url:
            report.error("Destination URL is required")
        elif not is_valid_url(url):
            report.error("Invalid destination URL format")

    def _check_platform(self, data: UnifiedCampaignData, report: ValidationReport) -> None:
        """Platform-specific rules; override."""

    def _check_objective(self, data: UnifiedCampaignData, report: ValidationReport, allowed: Any) -> None:
        if data.objective.value not in allowed:
            order = ["awareness", "traffic", "conversions", "leads"]
            names = [o for o in order if o in allowed] + sorted(set(allowed) - set(order))
            report.error(f"Invalid campaign objective. Must be one of: {', '.join(names)}")

    # ------------------------------------------------------------------
    # distribution
    # ------------------------------------------------------------------

    def _enter(self, state: DistributionState, **fields: Any) -> DistributionState:
        self.tracer.event("distribution.state", platform=self.platform.value, state=state.value, **fields)
        return state

    def _flatten(self, created: Dict[str, Any]) -> Tuple[Optional[str], Optional[str], List[str]]:
        raise NotImplementedError

    def _probe(self, client: Any, credentials: Any) -> None:
        missing = credentials.missing() if hasattr(credentials, "missing") else []
        if missing:
            raise PlatformConnectionError(
                self.platform.value,
                f"Missing {self.label} credentials: {', '.join(missing)}",
                {"missing": missing},
            )
        if self.probe_before_create and not client.test_connection():
            raise PlatformConnectionError(
                self.platform.value,
                f"Failed to connect to {self.label} API. Check your credentials.",
            )

    def distribute(self, data: UnifiedCampaignData, credentials: Any) -> PlatformCampaignResult:
        state = DistributionState.PENDING
        warnings: List[str] = []
        try:
            self._enter(state, campaign=getattr(data, "name", None))
            state = self._enter(DistributionState.VALIDATING)
            report = self.validate_campaign_data(data)
            warnings = list(report.warnings)
            for w in warnings:
                self.tracer.event("distribution.warning", platform=self.platform.value, message=w)
            if not report.valid:
                self.tracer.event("distribution.validation_failed", platform=self.platform.value, errors=report.errors)
                raise CampaignValidationError(report.errors)

            state = self._enter(DistributionState.CONNECTING)
            client = self.make_client(credentials)
            self._probe(client, credentials)

            state = self._enter(DistributionState.CREATING)
            created = client.create_campaign(data)
            campaign_id, ad_group_id, ad_ids = self._flatten(created)
        except DistributionError as exc:
            terminal = self._enter(_FAILURE_STATE[state], code=exc.code, message=exc.message)
            return self._failure(ResultError(exc.code, exc.message, exc.details or None), warnings, terminal)
        except Exception as exc:  # boundary: distribute never raises
            terminal = self._enter(_FAILURE_STATE[state], code=UNKNOWN_ERROR, message=str(exc))
            err = ResultError(UNKNOWN_ERROR, str(exc) or type(exc).__name__, {"type": type(exc).__name__})
            return self._failure(err, warnings, terminal)

        terminal = self._enter(DistributionState.CREATED, campaign_id=campaign_id)
        return PlatformCampaignResult(
            platform=self.platform,
            success=True,
            campaign_id=campaign_id,
            ad_group_id=ad_group_id,
            ad_ids=ad_ids,
            warnings=warnings,
            state=terminal.value,
        )

    def _failure(self, error: ResultError, warnings: List[str], state: DistributionState) -> PlatformCampaignResult:
        return PlatformCampaignResult(
            platform=self.platform,
            success=False,
            error=error,
            warnings=warnings,
            state=state.value,
        )

    # ------------------------------------------------------------------
    # pass-throughs
    # ------------------------------------------------------------------

    def activate_campaign(self, campaign_id: str, credentials: Any) -> Dict[str, Any]:
        return self.make_client(credentials).update_campaign_status(campaign_id, CampaignStatus.ACTIVE)

    def pause_campaign(self, campaign_id: str, credentials: Any) -> Dict[str, Any]:
        return self.make_client(credentials).update_campaign_status(campaign_id, CampaignStatus.PAUSED)

    def get_campaign_insights(self, campaign_id: str, credentials: Any) -> Dict[str, Any]:
        return self.make_client(credentials).get_campaign_insights(campaign_id)
