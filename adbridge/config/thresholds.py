from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import FrozenSet


@dataclass(frozen=True)
class AudienceLimits:
    min_age: int = 13
    max_age: int = 65


@dataclass(frozen=True)
class MetaLimits:
    min_daily_budget: Decimal = Decimal("1")
    min_lifetime_budget: Decimal = Decimal("10")
    default_city_radius_miles: int = 10


@dataclass(frozen=True)
class GoogleLimits:
    max_headline_chars: int = 30
    max_description_chars: int = 90
    # start dates closer than this only produce a warning
    min_start_lead_hours: int = 24
    # ages below this only produce a warning
    restricted_age_below: int = 18
    allowed_objectives: FrozenSet[str] = frozenset({"awareness", "traffic", "conversions", "leads"})


@dataclass(frozen=True)
class TikTokLimits:
    max_ad_text_chars: int = 100
    recommended_min_daily_budget: Decimal = Decimal("20")
    allowed_objectives: FrozenSet[str] = frozenset({"awareness", "traffic", "conversions", "leads"})


@dataclass(frozen=True)
class HttpTimeouts:
    default_timeout_s: int = 30
    upload_timeout_s: int = 120
    probe_timeout_s: int = 15


AUDIENCE_LIMITS = AudienceLimits()
META_LIMITS = MetaLimits()
GOOGLE_LIMITS = GoogleLimits()
TIKTOK_LIMITS = TikTokLimits()
HTTP_TIMEOUTS = HttpTimeouts()
