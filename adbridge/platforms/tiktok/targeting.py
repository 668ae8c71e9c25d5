"""Unified targeting -> TikTok ad group targeting fields."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, TypedDict

from adbridge.mappings.interests import get_interest_id
from adbridge.mappings.languages import tiktok_language_code
from adbridge.mappings.locations import get_location_id
from adbridge.models import Gender, Platform, UnifiedTargeting, ValidationReport
from adbridge.platforms.base import AgeBucket, dedupe, overlapping_buckets

AGE_BUCKETS = (
    AgeBucket("AGE_13_17", 13, 17),
    AgeBucket("AGE_18_24", 18, 24),
    AgeBucket("AGE_25_34", 25, 34),
    AgeBucket("AGE_35_44", 35, 44),
    AgeBucket("AGE_45_54", 45, 54),
    AgeBucket("AGE_55_100", 55, 100),
)
NETWORK_TYPES = ("WIFI", "2G", "3G", "4G", "5G")
OPERATING_SYSTEMS = ("ANDROID", "IOS")

TARGETING_SUGGESTIONS: Dict[str, List[str]] = {
    "awareness": [
        "Target broad age ranges (18-44) for maximum reach",
        "Use video interaction behaviors to find engaged users",
        "Consider targeting users who have watched similar content",
    ],
    "traffic": [
        "Target users who have clicked on ads before",
        "Use hashtag targeting for relevant topics",
        "Focus on users with high engagement rates",
    ],
    "conversions": [
        "Target users who have completed video views (100%)",
        "Use lookalike audiences based on converters",
        "Focus on users who have shared or liked shopping content",
    ],
    "app_promotion": [
        "Target users with compatible devices",
        "Focus on WiFi users for app downloads",
        "Target users who have installed similar apps",
    ],
}


class TikTokTargeting(TypedDict, total=False):
    location_ids: List[int]
    age_groups: List[str]
    gender: str
    languages: List[str]
    interest_category_ids: List[int]
    hashtag_ids: List[int]
    video_related_action: List[str]
    device_model_ids: List[str]
    operating_systems: List[str]
    network_types: List[str]


def _gender(unified: UnifiedTargeting) -> str:
    """Single restricting gender, or "" when the audience is unrestricted."""
    if unified.targets_all_genders:
        return ""
    picked = set(unified.genders)
    if picked == {Gender.MALE}:
        return "GENDER_MALE"
    if picked == {Gender.FEMALE}:
        return "GENDER_FEMALE"
    return ""


class TikTokTargetingTransformer:
    platform = Platform.TIKTOK

    def transform(self, unified: UnifiedTargeting) -> TikTokTargeting:
        targeting: TikTokTargeting = {
            "age_groups": [b.name for b in overlapping_buckets(unified.age_min, unified.age_max, AGE_BUCKETS)],
        }

        gender = _gender(unified)
        if gender:
            targeting["gender"] = gender

        if unified.locations:
            targeting["location_ids"] = dedupe(get_location_id(loc.name, Platform.TIKTOK) for loc in unified.locations)

        if unified.languages:
            targeting["languages"] = dedupe(tiktok_language_code(lang) for lang in unified.languages)

        interests = dedupe(get_interest_id(i, Platform.TIKTOK) for i in unified.interests)
        if interests:
            targeting["interest_category_ids"] = interests

        ext = unified.tiktok
        if ext is not None:
            # hashtags are accepted only as TikTok hashtag ids
            hashtags = dedupe(int(h.strip()) for h in ext.hashtags if h.strip().isdigit())
            if hashtags:
                targeting["hashtag_ids"] = hashtags
            if ext.video_categories:
                targeting["video_related_action"] = dedupe(ext.video_categories)
            if ext.device_models:
                targeting["device_model_ids"] = dedupe(ext.device_models)
            systems = dedupe(o.upper() for o in ext.operating_systems if o.upper() in OPERATING_SYSTEMS)
            if systems:
                targeting["operating_systems"] = systems
            networks = dedupe(c.upper() for c in ext.connection_types if c.upper() in NETWORK_TYPES)
            if networks:
                targeting["network_types"] = networks

        return targeting

    def validate(self, targeting: Mapping[str, Any]) -> ValidationReport:
        report = ValidationReport()
        if not targeting.get("location_ids"):
            report.error("At least one location is required")
        if not targeting.get("age_groups"):
            report.error("Age targeting is required")
        return report


def get_targeting_suggestions(objective: str) -> List[str]:
    return list(TARGETING_SUGGESTIONS.get(str(objective), TARGETING_SUGGESTIONS["awareness"]))
