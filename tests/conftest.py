from __future__ import annotations

import copy
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
from hypothesis import HealthCheck, settings

from adbridge.infra.tracer import RecordingTracer
from adbridge.integrations.credentials import (
    GoogleCredentials,
    LinkedInCredentials,
    MetaCredentials,
    TikTokCredentials,
)
from adbridge.integrations.http_client import HttpClientError, HttpRequest, HttpResponse, HttpResponseError
from adbridge.models import UnifiedCampaignData

# Hypothesis health checks trip on slow CI boxes; they are not functional failures.
settings.register_profile(
    "adbridge_stable",
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

settings.load_profile("adbridge_stable")

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeTransport:
    """Scripted HttpTransport: replays queued responses/failures in order."""

    def __init__(self) -> None:
        self.requests: List[HttpRequest] = []
        self._queue: List[Any] = []

    def reply(self, body: Any = None, *, status: int = 200, headers: Optional[Dict[str, str]] = None,
              raw: Optional[bytes] = None) -> "FakeTransport":
        payload = raw if raw is not None else (b"" if body is None else json.dumps(body).encode("utf-8"))
        self._queue.append(HttpResponse(status=status, headers=dict(headers or {}), body=payload))
        return self

    def reject(self, status: int, body: Any) -> "FakeTransport":
        self._queue.append(HttpResponseError(status=status, body=json.dumps(body).encode("utf-8")))
        return self

    def drop(self, message: str = "connection refused") -> "FakeTransport":
        self._queue.append(HttpClientError(message))
        return self

    def request(self, req: HttpRequest) -> HttpResponse:
        self.requests.append(req)
        if not self._queue:
            raise AssertionError(f"unexpected request: {req.method} {req.url}")
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def pending(self) -> int:
        return len(self._queue)

    def urls(self) -> List[str]:
        return [r.url for r in self.requests]

    def payload(self, index: int) -> Any:
        body = self.requests[index].body
        return json.loads(body.decode("utf-8")) if body else None


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = {**out[k], **v}
        else:
            out[k] = v
    return out


def campaign_dict(**overrides: Any) -> Dict[str, Any]:
    base = {
        "name": "Spring Sale",
        "objective": "traffic",
        "budget": {"amount": 25, "type": "daily", "currency": "USD"},
        "schedule": {
            "startDate": (FIXED_NOW + timedelta(days=3)).isoformat(),
            "endDate": (FIXED_NOW + timedelta(days=33)).isoformat(),
        },
        "targeting": {
            "ageMin": 25,
            "ageMax": 44,
            "genders": ["all"],
            "locations": [{"type": "country", "name": "United States", "code": "US"}],
            "interests": ["Technology"],
            "languages": ["English"],
        },
        "creative": {
            "headline": "Spring Sale Now On",
            "primaryText": "Save on every order this week.",
            "description": "Free shipping on orders over $50.",
            "destinationUrl": "https://shop.example.com/spring",
            "callToAction": "Shop Now",
            "media": [{"type": "image", "url": "https://cdn.example.com/spring.jpg"}],
        },
    }
    return _merge(base, overrides)


@pytest.fixture
def make_campaign():
    def _make(**overrides: Any) -> UnifiedCampaignData:
        return UnifiedCampaignData.from_dict(campaign_dict(**overrides))

    return _make


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def tracer() -> RecordingTracer:
    return RecordingTracer()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def meta_creds() -> MetaCredentials:
    return MetaCredentials(access_token="meta-test-token", ad_account_id="1234", page_id="555")


@pytest.fixture
def google_creds() -> GoogleCredentials:
    return GoogleCredentials(
        access_token="google-test-token",
        customer_id="123-456-7890",
        developer_token="dev-token",
        business_name="Example Shop",
    )


@pytest.fixture
def tiktok_creds() -> TikTokCredentials:
    return TikTokCredentials(access_token="tiktok-test-token", advertiser_id="7000", identity_id="id-9")


@pytest.fixture
def linkedin_creds() -> LinkedInCredentials:
    return LinkedInCredentials(
        access_token="li-test-token",
        ad_account_id="5100",
        organization_urn="urn:li:organization:42",
    )


@pytest.fixture
def raw_campaign():
    return campaign_dict


class FakeClient:
    """Stands in for a platform API client behind ``client_factory``."""

    def __init__(self, created: Optional[Dict[str, Any]] = None, *, connected: bool = True,
                 exc: Optional[Exception] = None) -> None:
        self.created = created or {}
        self.connected = connected
        self.exc = exc
        self.calls: List[str] = []

    def test_connection(self) -> bool:
        self.calls.append("test_connection")
        return self.connected

    def create_campaign(self, data: UnifiedCampaignData) -> Dict[str, Any]:
        self.calls.append("create_campaign")
        if self.exc is not None:
            raise self.exc
        return self.created

    def update_campaign_status(self, campaign_id: str, status: Any) -> Dict[str, Any]:
        self.calls.append(f"status:{campaign_id}:{status.value}")
        return {"id": campaign_id, "status": status.value}

    def get_campaign_insights(self, campaign_id: str) -> Dict[str, Any]:
        self.calls.append(f"insights:{campaign_id}")
        return {"impressions": 1}


@pytest.fixture
def fake_client():
    return FakeClient
