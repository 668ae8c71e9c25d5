"""Shared pieces for the per-platform transformer/client pairs."""

from __future__ import annotations

import json
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal
from typing import (
    Any,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    Union,
)

import deal

from adbridge.config.thresholds import AUDIENCE_LIMITS, HTTP_TIMEOUTS
from adbridge.infra.settings import get_settings
from adbridge.infra.tracer import Tracer, guarded
from adbridge.integrations.errors import DistributionError, PlatformConnectionError, RemoteRejectionError
from adbridge.integrations.http_client import (
    HttpClientError,
    HttpRequest,
    HttpResponse,
    HttpResponseError,
    HttpTransport,
    SimpleHttpClient,
    with_query,
)
from adbridge.models import Platform, UnifiedTargeting, ValidationReport

T = TypeVar("T", bound=Hashable)

CENTS = 100
MICROS = 1_000_000


class AgeBucket(NamedTuple):
    name: str
    min: int
    max: int

    def overlaps(self, age_min: int, age_max: int) -> bool:
        return self.min <= age_max and self.max >= age_min


@deal.ensure(
    lambda age_min, age_max, buckets, result: all(b.overlaps(age_min, age_max) for b in result),
    message="every emitted bucket overlaps the requested range",
)
def overlapping_buckets(age_min: int, age_max: int, buckets: Sequence[AgeBucket]) -> List[AgeBucket]:
    """Every bucket whose closed interval intersects [age_min, age_max], in table order.

    An inverted range yields nothing; platform ``validate`` reports it.
    """
    if age_min > age_max:
        return []
    return [b for b in buckets if b.overlaps(age_min, age_max)]


@deal.pre(lambda amount, factor: Decimal(str(amount)) >= 0, message="amount must be >= 0")
@deal.post(lambda result: result >= 0, message="minor units are non-negative")
@deal.raises(deal.PreContractError, deal.RaisesContractError)
def to_minor_units(amount: Union[Decimal, int, float, str], factor: int) -> int:
    """Major currency units -> platform minor units (cents=100, micros=1_000_000)."""
    d = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((d * factor).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def dedupe(values: Iterable[Optional[T]]) -> List[T]:
    """Drop None and repeats; first occurrence wins."""
    seen = set()
    out: List[T] = []
    for v in values:
        if v is None or v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


def check_age_range(report: ValidationReport, age_min: Optional[int], age_max: Optional[int]) -> None:
    lo, hi = AUDIENCE_LIMITS.min_age, AUDIENCE_LIMITS.max_age
    if age_min is not None and not lo <= age_min <= hi:
        report.error(f"Minimum age must be between {lo} and {hi}")
    if age_max is not None and not lo <= age_max <= hi:
        report.error(f"Maximum age must be between {lo} and {hi}")
    if age_min is not None and age_max is not None and age_min >= age_max:
        report.error("Minimum age must be less than maximum age")


class TargetingTransformer(Protocol):
    """One concrete implementation per platform; payloads are platform-native dicts."""

    platform: Platform

    def transform(self, unified: UnifiedTargeting) -> Dict[str, Any]: ...

    def validate(self, targeting: Mapping[str, Any]) -> ValidationReport: ...


class PlatformApiClient:
    """Owns one platform's remote-call sequence.

    Subclasses provide ``_auth_headers`` and ``_error_message``; every remote call
    goes through ``_send`` so transport failures map onto the error taxonomy the
    same way for all platforms:

    - HTTP status >= 400 -> RemoteRejectionError (platform message + step)
    - network failure / timeout -> PlatformConnectionError
    """

    platform: Platform
    label: str = "Platform"

    def __init__(
        self,
        credentials: Any,
        *,
        http: Optional[HttpTransport] = None,
        tracer: Optional[Tracer] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.credentials = credentials
        self.http: HttpTransport = http or SimpleHttpClient.from_settings()
        self.tracer: Tracer = guarded(tracer)
        s = get_settings()
        self.timeout_s = float(timeout_s or s.get("http.timeout_s", HTTP_TIMEOUTS.default_timeout_s))
        self.upload_timeout_s = float(s.get("http.upload_timeout_s", HTTP_TIMEOUTS.upload_timeout_s))
        self.probe_timeout_s = float(HTTP_TIMEOUTS.probe_timeout_s)

    # -- hooks ---------------------------------------------------------------

    def _auth_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    def _error_message(self, body: Any) -> Optional[str]:
        return None

    def _remote_code(self, body: Any) -> Any:
        return None

    def _check_body(self, step: str, status: int, body: Any) -> None:
        """Reject 2xx responses that still carry a platform error (TikTok)."""

    # -- transport -----------------------------------------------------------

    def _send(
        self,
        step: str,
        method: str,
        url: str,
        *,
        payload: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout_s: Optional[float] = None,
        raw_body: Optional[bytes] = None,
        auth: bool = True,
    ) -> HttpResponse:
        h = dict(self._auth_headers()) if auth else {}
        if headers:
            h.update(headers)
        body = raw_body
        if payload is not None:
            h.setdefault("Content-Type", "application/json; charset=utf-8")
            body = json.dumps(payload, ensure_ascii=False).encode("utf-8")

        full_url = with_query(url, params)
        self.tracer.event("api.request", platform=self.platform.value, step=step, method=method, url=url)
        try:
            resp = self.http.request(
                HttpRequest(
                    method=method,
                    url=full_url,
                    headers=h,
                    body=body,
                    timeout_s=timeout_s or self.timeout_s,
                )
            )
        except HttpResponseError as e:
            err_body = e.json()
            msg = self._error_message(err_body) or _body_excerpt(e.body) or f"HTTP {e.status}"
            self.tracer.event("api.error", platform=self.platform.value, step=step, status=e.status, message=msg)
            raise RemoteRejectionError(
                self.platform.value,
                step,
                f"{self.label} API error during {step}: {msg}",
                status=e.status,
                remote_code=self._remote_code(err_body),
            ) from e
        except HttpClientError as e:
            self.tracer.event("api.error", platform=self.platform.value, step=step, message=str(e))
            raise PlatformConnectionError(
                self.platform.value,
                f"{self.label} API unreachable during {step}: {e}",
                {"step": step},
            ) from e

        self.tracer.event("api.step_completed", platform=self.platform.value, step=step, status=resp.status)
        return resp

    def _send_json(self, step: str, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        resp = self._send(step, method, url, **kwargs)
        try:
            data = resp.json()
        except (UnicodeDecodeError, ValueError) as e:
            raise RemoteRejectionError(
                self.platform.value,
                step,
                f"{self.label} API returned a non-JSON body during {step}",
                status=resp.status,
            ) from e
        self._check_body(step, resp.status, data)
        return data if isinstance(data, dict) else {"data": data}

    @contextmanager
    def _tracking(self, created: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        """Attach already-created remote ids to any failure (no rollback)."""
        try:
            yield created
        except DistributionError as exc:
            if created:
                exc.details["created"] = dict(created)
                self.tracer.event("api.partial_failure", platform=self.platform.value, created=dict(created))
            raise

    def _download(self, step: str, url: str) -> bytes:
        """Fetch media bytes from a public URL; platform auth headers are not sent."""
        resp = self._send(step, "GET", url, timeout_s=self.upload_timeout_s, auth=False)
        return resp.body

    def _probe(self, method: str, url: str, **kwargs: Any) -> bool:
        """Connectivity probe: True when credentials are accepted."""
        try:
            self._send_json("test_connection", method, url, timeout_s=self.probe_timeout_s, **kwargs)
        except DistributionError as exc:
            self.tracer.event("api.probe_failed", platform=self.platform.value, message=exc.message)
            return False
        return True

    def _require_id(self, step: str, value: Any) -> str:
        if value in (None, ""):
            raise RemoteRejectionError(
                self.platform.value, step, f"{self.label} API response for {step} carried no id"
            )
        return str(value)


def _body_excerpt(body: bytes, limit: int = 200) -> str:
    try:
        text = body.decode("utf-8", errors="replace").strip()
    except AttributeError:
        return ""
    return text[:limit]
