"""
Unified campaign model + uniform results.

UnifiedCampaignData is built once (wizard layer, campaign file, tests) and
handed by value to every distributor. Nothing in adbridge mutates it: all
dataclasses here are frozen and transformers build fresh payloads per call.

``from_dict`` accepts the camelCase keys the wizard produces and their
snake_case equivalents. Unknown enum values raise ValueError at construction,
which happens outside ``distribute``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from adbridge.infra.time_utc import ensure_utc, parse_datetime


class Platform(str, Enum):
    META = "meta"
    GOOGLE = "google"
    LINKEDIN = "linkedin"
    TIKTOK = "tiktok"

    @classmethod
    def parse(cls, value: Any) -> "Platform":
        if isinstance(value, Platform):
            return value
        v = str(value).strip().lower()
        aliases = {"facebook": "meta", "instagram": "meta", "google_ads": "google"}
        return cls(aliases.get(v, v))


class CampaignObjective(str, Enum):
    AWARENESS = "awareness"
    TRAFFIC = "traffic"
    ENGAGEMENT = "engagement"
    LEADS = "leads"
    CONVERSIONS = "conversions"
    APP_PROMOTION = "app_promotion"


class Gender(str, Enum):
    ALL = "all"
    MALE = "male"
    FEMALE = "female"


class LocationType(str, Enum):
    COUNTRY = "country"
    REGION = "region"
    CITY = "city"
    ZIP = "zip"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class BudgetType(str, Enum):
    DAILY = "daily"
    LIFETIME = "lifetime"


class BidStrategy(str, Enum):
    LOWEST_COST = "lowest_cost"
    COST_CAP = "cost_cap"
    BID_CAP = "bid_cap"


class CampaignStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    DELETED = "DELETED"


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in data and data[k] is not None:
            return data[k]
    return default


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def _decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a valid amount")
    return Decimal(str(value))


def _opt_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else _decimal(value)


# ---------------------------------------------------------------------------
# Targeting
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UnifiedLocation:
    type: LocationType
    name: str
    code: Optional[str] = None  # ISO country code or platform key
    radius: Optional[float] = None  # miles, city/zip only
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnifiedLocation":
        return cls(
            type=LocationType(str(data["type"]).lower()),
            name=str(data.get("name", "")),
            code=data.get("code"),
            radius=data.get("radius"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )


@dataclass(frozen=True)
class FacebookExtension:
    life_events: List[str] = field(default_factory=list)
    relationship_statuses: List[str] = field(default_factory=list)
    education_statuses: List[str] = field(default_factory=list)
    employers: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FacebookExtension":
        education = data.get("education") or {}
        work = data.get("work") or {}
        return cls(
            life_events=_str_list(_pick(data, "lifeEvents", "life_events")),
            relationship_statuses=_str_list(_pick(data, "relationshipStatuses", "relationship_statuses")),
            education_statuses=_str_list(
                _pick(data, "educationStatuses", "education_statuses")
                or _pick(education, "educationStatuses", "education_statuses")
            ),
            employers=_str_list(_pick(data, "employers") or _pick(work, "employers")),
        )


@dataclass(frozen=True)
class NetworkSettings:
    google_search: Optional[bool] = None
    search_partners: Optional[bool] = None
    display_network: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NetworkSettings":
        return cls(
            google_search=_pick(data, "googleSearch", "google_search"),
            search_partners=_pick(data, "searchPartners", "search_partners"),
            display_network=_pick(data, "displayNetwork", "display_network"),
        )


@dataclass(frozen=True)
class GoogleExtension:
    keywords: List[str] = field(default_factory=list)
    topics: List[str] = field(default_factory=list)
    placements: List[str] = field(default_factory=list)
    remarketing_lists: List[str] = field(default_factory=list)
    custom_audiences: List[str] = field(default_factory=list)
    household_income: List[str] = field(default_factory=list)
    device_types: List[str] = field(default_factory=list)
    network_settings: Optional[NetworkSettings] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GoogleExtension":
        ns = _pick(data, "networkSettings", "network_settings")
        return cls(
            keywords=_str_list(data.get("keywords")),
            topics=_str_list(data.get("topics")),
            placements=_str_list(data.get("placements")),
            remarketing_lists=_str_list(_pick(data, "remarketingLists", "remarketing_lists")),
            custom_audiences=_str_list(_pick(data, "customAudiences", "custom_audiences")),
            household_income=_str_list(_pick(data, "householdIncome", "household_income")),
            device_types=_str_list(_pick(data, "deviceTypes", "device_types")),
            network_settings=NetworkSettings.from_dict(ns) if ns else None,
        )


@dataclass(frozen=True)
class LinkedInExtension:
    job_titles: List[str] = field(default_factory=list)
    job_functions: List[str] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)
    company_sizes: List[str] = field(default_factory=list)
    industries: List[str] = field(default_factory=list)
    seniority: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    degrees: List[str] = field(default_factory=list)
    fields_of_study: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LinkedInExtension":
        return cls(
            job_titles=_str_list(_pick(data, "jobTitles", "job_titles")),
            job_functions=_str_list(_pick(data, "jobFunctions", "job_functions")),
            companies=_str_list(data.get("companies")),
            company_sizes=_str_list(_pick(data, "companySize", "company_sizes", "company_size")),
            industries=_str_list(data.get("industries")),
            seniority=_str_list(data.get("seniority")),
            skills=_str_list(data.get("skills")),
            degrees=_str_list(data.get("degrees")),
            fields_of_study=_str_list(_pick(data, "fieldsOfStudy", "fields_of_study")),
        )


@dataclass(frozen=True)
class TikTokExtension:
    hashtags: List[str] = field(default_factory=list)
    video_categories: List[str] = field(default_factory=list)
    device_models: List[str] = field(default_factory=list)
    operating_systems: List[str] = field(default_factory=list)
    connection_types: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TikTokExtension":
        return cls(
            hashtags=_str_list(data.get("hashtags")),
            video_categories=_str_list(_pick(data, "videoCategories", "video_categories")),
            device_models=_str_list(_pick(data, "deviceModels", "device_models")),
            operating_systems=_str_list(_pick(data, "operatingSystems", "operating_systems")),
            connection_types=_str_list(_pick(data, "connectionTypes", "connection_types")),
        )


@dataclass(frozen=True)
class UnifiedTargeting:
    age_min: int = 18
    age_max: int = 65
    genders: List[Gender] = field(default_factory=lambda: [Gender.ALL])
    locations: List[UnifiedLocation] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    behaviors: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    facebook: Optional[FacebookExtension] = None
    google: Optional[GoogleExtension] = None
    linkedin: Optional[LinkedInExtension] = None
    tiktok: Optional[TikTokExtension] = None

    @property
    def targets_all_genders(self) -> bool:
        return not self.genders or Gender.ALL in self.genders

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnifiedTargeting":
        fb = data.get("facebook")
        gg = data.get("google")
        li = data.get("linkedin")
        tt = data.get("tiktok")
        genders = data.get("genders")
        return cls(
            age_min=int(_pick(data, "ageMin", "age_min", default=18)),
            age_max=int(_pick(data, "ageMax", "age_max", default=65)),
            genders=[Gender(str(g).lower()) for g in genders] if genders else [Gender.ALL],
            locations=[UnifiedLocation.from_dict(loc) for loc in data.get("locations") or []],
            interests=_str_list(data.get("interests")),
            behaviors=_str_list(data.get("behaviors")),
            languages=_str_list(data.get("languages")),
            facebook=FacebookExtension.from_dict(fb) if fb else None,
            google=GoogleExtension.from_dict(gg) if gg else None,
            linkedin=LinkedInExtension.from_dict(li) if li else None,
            tiktok=TikTokExtension.from_dict(tt) if tt else None,
        )


# ---------------------------------------------------------------------------
# Creative / budget / schedule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UnifiedMedia:
    url: str
    type: MediaType
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None  # seconds, video only
    thumbnail: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnifiedMedia":
        return cls(
            url=str(data.get("url", "")),
            type=MediaType(str(data["type"]).lower()),
            width=data.get("width"),
            height=data.get("height"),
            duration=data.get("duration"),
            thumbnail=data.get("thumbnail"),
        )


@dataclass(frozen=True)
class UnifiedCreative:
    headline: str
    primary_text: str
    destination_url: str
    call_to_action: str = "Learn More"
    description: Optional[str] = None
    media: List[UnifiedMedia] = field(default_factory=list)

    @property
    def primary_media(self) -> Optional[UnifiedMedia]:
        return self.media[0] if self.media else None

    @property
    def ad_text(self) -> str:
        """Single-text platforms (TikTok) use description, else headline."""
        return self.description or self.headline or ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnifiedCreative":
        return cls(
            headline=str(data.get("headline") or ""),
            primary_text=str(_pick(data, "primaryText", "primary_text", default="")),
            destination_url=str(_pick(data, "destinationUrl", "destination_url", default="")),
            call_to_action=str(_pick(data, "callToAction", "call_to_action", default="Learn More")),
            description=data.get("description"),
            media=[UnifiedMedia.from_dict(m) for m in data.get("media") or []],
        )


@dataclass(frozen=True)
class Budget:
    amount: Decimal
    type: BudgetType = BudgetType.DAILY
    currency: str = "USD"

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _decimal(self.amount))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Budget":
        return cls(
            amount=_decimal(data["amount"]),
            type=BudgetType(str(data.get("type", "daily")).lower()),
            currency=str(data.get("currency") or "USD").upper(),
        )


@dataclass(frozen=True)
class Schedule:
    start_date: datetime
    end_date: datetime

    def __post_init__(self) -> None:
        # naive datetimes are read as UTC
        object.__setattr__(self, "start_date", ensure_utc(self.start_date))
        object.__setattr__(self, "end_date", ensure_utc(self.end_date))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Schedule":
        return cls(
            start_date=parse_datetime(_pick(data, "startDate", "start_date")),
            end_date=parse_datetime(_pick(data, "endDate", "end_date")),
        )


@dataclass(frozen=True)
class Bidding:
    strategy: BidStrategy = BidStrategy.LOWEST_COST
    bid_cap: Optional[Decimal] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "bid_cap", _opt_decimal(self.bid_cap))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bidding":
        return cls(
            strategy=BidStrategy(str(data.get("strategy", "lowest_cost")).lower()),
            bid_cap=_opt_decimal(_pick(data, "bidCap", "bid_cap")),
        )


@dataclass(frozen=True)
class UnifiedCampaignData:
    name: str
    objective: CampaignObjective
    budget: Budget
    schedule: Schedule
    targeting: UnifiedTargeting
    creative: UnifiedCreative
    bidding: Optional[Bidding] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnifiedCampaignData":
        bidding = data.get("bidding")
        return cls(
            name=str(data.get("name") or ""),
            objective=CampaignObjective(str(data["objective"]).lower()),
            budget=Budget.from_dict(data["budget"]),
            schedule=Schedule.from_dict(data["schedule"]),
            targeting=UnifiedTargeting.from_dict(data.get("targeting") or {}),
            creative=UnifiedCreative.from_dict(data["creative"]),
            bidding=Bidding.from_dict(bidding) if bidding else None,
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class ValidationReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, message: str) -> None:
        if message not in self.errors:
            self.errors.append(message)

    def warn(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    def extend(self, other: "ValidationReport") -> None:
        for e in other.errors:
            self.error(e)
        for w in other.warnings:
            self.warn(w)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors), "warnings": list(self.warnings)}


@dataclass(frozen=True)
class ResultError:
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            out["details"] = self.details
        return out


@dataclass(frozen=True)
class PlatformCampaignResult:
    """Uniform success/failure envelope. Ids are opaque strings."""

    platform: Platform
    success: bool
    campaign_id: Optional[str] = None
    ad_group_id: Optional[str] = None
    ad_ids: List[str] = field(default_factory=list)
    error: Optional[ResultError] = None
    warnings: List[str] = field(default_factory=list)
    state: Optional[str] = None

    @property
    def ad_set_id(self) -> Optional[str]:
        return self.ad_group_id

    @property
    def ad_id(self) -> Optional[str]:
        return self.ad_ids[0] if self.ad_ids else None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"platform": self.platform.value, "success": self.success}
        if self.campaign_id:
            out["campaignId"] = self.campaign_id
        if self.ad_group_id:
            key = "adSetId" if self.platform is Platform.META else "adGroupId"
            out[key] = self.ad_group_id
        if self.ad_ids:
            out["adId"] = self.ad_ids[0]
            if len(self.ad_ids) > 1:
                out["adIds"] = list(self.ad_ids)
        if self.error is not None:
            out["error"] = self.error.to_dict()
        if self.warnings:
            out["warnings"] = list(self.warnings)
        if self.state:
            out["state"] = self.state
        return out


@dataclass(frozen=True)
class DistributionResult:
    results: List[PlatformCampaignResult] = field(default_factory=list)

    @property
    def total_platforms(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total_platforms - self.successful

    def for_platform(self, platform: Platform) -> Optional[PlatformCampaignResult]:
        for r in self.results:
            if r.platform is platform:
                return r
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalPlatforms": self.total_platforms,
            "successful": self.successful,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }
