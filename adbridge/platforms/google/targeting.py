"""Unified targeting -> Google Ads criteria set.

Ages map onto every overlapping age-range criterion; interests become
affinity (user interest) criteria; keywords/topics/placements come only from
the ``google`` extension bag.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, NamedTuple, Tuple, TypedDict

from adbridge.mappings.interests import get_interest_id
from adbridge.mappings.languages import google_language_id
from adbridge.mappings.locations import get_location_id
from adbridge.models import Gender, Platform, UnifiedTargeting, ValidationReport
from adbridge.platforms.base import AgeBucket, dedupe, overlapping_buckets

AGE_BUCKETS = (
    AgeBucket("AGE_RANGE_18_24", 18, 24),
    AgeBucket("AGE_RANGE_25_34", 25, 34),
    AgeBucket("AGE_RANGE_35_44", 35, 44),
    AgeBucket("AGE_RANGE_45_54", 45, 54),
    AgeBucket("AGE_RANGE_55_64", 55, 64),
    AgeBucket("AGE_RANGE_65_UP", 65, 120),
    AgeBucket("AGE_RANGE_UNDETERMINED", 0, 17),  # under 18
)

_GENDERS = {Gender.MALE: "GENDER_MALE", Gender.FEMALE: "GENDER_FEMALE"}

HOUSEHOLD_INCOME: Dict[str, str] = {
    "top-10": "HOUSEHOLD_INCOME_TOP_10_PERCENT",
    "top-20": "HOUSEHOLD_INCOME_11_20_PERCENT",
    "top-30": "HOUSEHOLD_INCOME_21_30_PERCENT",
    "top-40": "HOUSEHOLD_INCOME_31_40_PERCENT",
    "top-50": "HOUSEHOLD_INCOME_41_50_PERCENT",
    "lower-50": "HOUSEHOLD_INCOME_LOWER_50_PERCENT",
    "undetermined": "HOUSEHOLD_INCOME_UNDETERMINED",
}

DEVICE_TYPES = ("DESKTOP", "MOBILE", "TABLET")

TARGETING_SUGGESTIONS: Dict[str, List[str]] = {
    "awareness": [
        "Use affinity audiences to reach users with relevant interests",
        "Target Display Network for broad reach and visibility",
        "Consider demographic targeting to refine your audience",
    ],
    "traffic": [
        "Use keyword targeting to capture search intent",
        "Target both Search and Display networks for maximum traffic",
        "Consider in-market audiences for users actively researching",
    ],
    "conversions": [
        "Focus on high-intent keywords with exact or phrase match",
        "Use remarketing lists to re-engage previous visitors",
        "Target in-market audiences for users ready to purchase",
    ],
    "leads": [
        "Combine keyword targeting with remarketing for best results",
        "Use custom audiences based on your customer data",
        "Consider targeting competitor placements",
    ],
}


class GoogleTargeting(TypedDict, total=False):
    locationIds: List[int]
    ageRanges: List[str]
    genders: List[str]
    languageIds: List[int]
    affinityAudiences: List[str]
    customAudiences: List[str]
    remarketingLists: List[str]
    keywords: List[str]
    topics: List[int]
    placements: List[str]
    deviceTypes: List[str]
    householdIncomes: List[str]
    targetGoogleSearch: bool
    targetSearchNetwork: bool
    targetContentNetwork: bool
    targetPartnerSearchNetwork: bool


class GoogleTargetingTransformer:
    platform = Platform.GOOGLE

    def transform(self, unified: UnifiedTargeting) -> GoogleTargeting:
        targeting: GoogleTargeting = {
            "ageRanges": [b.name for b in overlapping_buckets(unified.age_min, unified.age_max, AGE_BUCKETS)],
        }

        if not unified.targets_all_genders:
            targeting["genders"] = dedupe(_GENDERS.get(g) for g in unified.genders)

        if unified.locations:
            targeting["locationIds"] = dedupe(get_location_id(loc.name, Platform.GOOGLE) for loc in unified.locations)

        if unified.languages:
            targeting["languageIds"] = dedupe(google_language_id(lang) for lang in unified.languages)

        affinity = dedupe(get_interest_id(i, Platform.GOOGLE) for i in unified.interests)
        if affinity:
            targeting["affinityAudiences"] = [str(a) for a in affinity]

        ext = unified.google
        if ext is not None:
            if ext.keywords:
                targeting["keywords"] = dedupe(k.strip() for k in ext.keywords if k.strip())
            topics = dedupe(int(t) for t in ext.topics if str(t).strip().isdigit())
            if topics:
                targeting["topics"] = topics
            if ext.placements:
                targeting["placements"] = dedupe(ext.placements)
            if ext.custom_audiences:
                targeting["customAudiences"] = dedupe(ext.custom_audiences)
            if ext.remarketing_lists:
                targeting["remarketingLists"] = dedupe(ext.remarketing_lists)
            if ext.household_income:
                targeting["householdIncomes"] = dedupe(
                    HOUSEHOLD_INCOME.get(i, HOUSEHOLD_INCOME["undetermined"]) for i in ext.household_income
                )
            if ext.device_types:
                targeting["deviceTypes"] = dedupe(d.upper() for d in ext.device_types if d.upper() in DEVICE_TYPES)
            if ext.network_settings is not None:
                ns = ext.network_settings
                targeting["targetGoogleSearch"] = True if ns.google_search is None else ns.google_search
                targeting["targetSearchNetwork"] = bool(ns.search_partners)
                targeting["targetContentNetwork"] = True if ns.display_network is None else ns.display_network
                targeting["targetPartnerSearchNetwork"] = False

        # Search + Display unless told otherwise
        if "targetGoogleSearch" not in targeting:
            targeting["targetGoogleSearch"] = True
            targeting["targetSearchNetwork"] = False
            targeting["targetContentNetwork"] = True
            targeting["targetPartnerSearchNetwork"] = False

        return targeting

    def validate(self, targeting: Mapping[str, Any]) -> ValidationReport:
        report = ValidationReport()

        if not targeting.get("locationIds"):
            report.error("At least one location is required")
        if not targeting.get("ageRanges"):
            report.error("Age range must overlap at least one Google Ads age bracket")

        search = bool(targeting.get("targetGoogleSearch") or targeting.get("targetSearchNetwork"))
        display = bool(targeting.get("targetContentNetwork"))
        if not (search or display or targeting.get("targetPartnerSearchNetwork")):
            report.error("At least one network (Search or Display) must be selected")
        if targeting.get("keywords") and not search:
            report.error("Keyword targeting requires Google Search or Search Network to be enabled")
        if (targeting.get("placements") or targeting.get("topics")) and not display:
            report.error("Placement and topic targeting require Display Network to be enabled")
        return report


def get_targeting_suggestions(objective: str) -> List[str]:
    return list(TARGETING_SUGGESTIONS.get(str(objective), TARGETING_SUGGESTIONS["awareness"]))


class BidStrategySuggestion(NamedTuple):
    strategy: str
    description: str


BID_STRATEGY_SUGGESTIONS: Dict[str, Tuple[BidStrategySuggestion, ...]] = {
    "awareness": (
        BidStrategySuggestion("TARGET_CPM", "Optimize for impressions and brand visibility"),
        BidStrategySuggestion("MAXIMIZE_CONVERSIONS", "Get the most conversions within your budget"),
    ),
    "traffic": (
        BidStrategySuggestion("MAXIMIZE_CLICKS", "Get the most clicks within your budget"),
        BidStrategySuggestion("MANUAL_CPC", "Full control over individual keyword bids"),
    ),
    "conversions": (
        BidStrategySuggestion("TARGET_CPA", "Optimize for conversions at a target cost per acquisition"),
        BidStrategySuggestion("TARGET_ROAS", "Optimize for return on ad spend"),
    ),
    "leads": (
        BidStrategySuggestion("TARGET_CPA", "Optimize for leads at a target cost per lead"),
        BidStrategySuggestion("MAXIMIZE_CONVERSION_VALUE", "Maximize the total conversion value"),
    ),
}


def get_bid_strategy_suggestions(objective: str) -> List[BidStrategySuggestion]:
    """Recommended Google Ads bid strategies; unknown objectives get the traffic set."""
    return list(BID_STRATEGY_SUGGESTIONS.get(str(objective), BID_STRATEGY_SUGGESTIONS["traffic"]))
