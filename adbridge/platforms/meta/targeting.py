"""Unified targeting -> Meta Marketing API ``targeting`` spec (Facebook + Instagram)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, TypedDict

from adbridge.config.thresholds import META_LIMITS
from adbridge.mappings.interests import get_interest_id
from adbridge.mappings.languages import meta_locale
from adbridge.mappings.locations import get_country_code, get_meta_geo_key
from adbridge.models import Gender, LocationType, Platform, UnifiedLocation, UnifiedTargeting, ValidationReport
from adbridge.platforms.base import check_age_range, dedupe

_GENDER_CODES = {Gender.MALE: 1, Gender.FEMALE: 2}

RELATIONSHIP_STATUSES: Dict[str, int] = {
    "single": 1,
    "in_relationship": 2,
    "married": 3,
    "engaged": 4,
    "not_specified": 6,
}

EDUCATION_STATUSES: Dict[str, int] = {
    "high_school": 1,
    "undergraduate": 2,
    "graduate": 3,
    "some_college": 4,
    "associate_degree": 5,
}


class MetaTargeting(TypedDict, total=False):
    geo_locations: Dict[str, List[Any]]
    age_min: int
    age_max: int
    genders: List[int]
    locales: List[int]
    interests: List[Dict[str, str]]
    life_events: List[Dict[str, str]]
    relationship_statuses: List[int]
    education_statuses: List[int]
    work_employers: List[Dict[str, str]]


class MetaTargetingTransformer:
    platform = Platform.META

    def transform(self, unified: UnifiedTargeting) -> MetaTargeting:
        targeting: MetaTargeting = {
            "age_min": unified.age_min,
            "age_max": unified.age_max,
        }

        # "all" means unrestricted: omit the field
        if not unified.targets_all_genders:
            targeting["genders"] = dedupe(_GENDER_CODES.get(g) for g in unified.genders)

        if unified.locations:
            targeting["geo_locations"] = self._geo_locations(unified.locations)

        interests = []
        for name in dedupe(unified.interests):
            interest_id = get_interest_id(name, Platform.META)
            if interest_id is not None:
                interests.append({"id": str(interest_id), "name": name})
        if interests:
            targeting["interests"] = interests

        if unified.languages:
            targeting["locales"] = dedupe(meta_locale(lang) for lang in unified.languages)

        fb = unified.facebook
        if fb is not None:
            if fb.life_events:
                targeting["life_events"] = [{"id": e, "name": e} for e in dedupe(fb.life_events)]
            if fb.relationship_statuses:
                targeting["relationship_statuses"] = dedupe(
                    RELATIONSHIP_STATUSES.get(s, RELATIONSHIP_STATUSES["not_specified"])
                    for s in fb.relationship_statuses
                )
            if fb.education_statuses:
                targeting["education_statuses"] = dedupe(
                    EDUCATION_STATUSES.get(s, EDUCATION_STATUSES["high_school"])
                    for s in fb.education_statuses
                )
            if fb.employers:
                targeting["work_employers"] = [{"id": e, "name": e} for e in dedupe(fb.employers)]

        return targeting

    def _geo_locations(self, locations: List[UnifiedLocation]) -> Dict[str, List[Any]]:
        countries: List[str] = []
        cities: List[Dict[str, Any]] = []
        regions: List[Dict[str, str]] = []
        zips: List[Dict[str, str]] = []
        seen = set()

        for loc in locations:
            if loc.type is LocationType.COUNTRY:
                code = loc.code or get_country_code(loc.name)
                if code and ("c", code) not in seen:
                    seen.add(("c", code))
                    countries.append(code)
            elif loc.type is LocationType.CITY:
                key = _keyed_lookup(loc, "cities")
                if key and ("city", key) not in seen:
                    seen.add(("city", key))
                    cities.append(
                        {
                            "key": key,
                            "radius": loc.radius or META_LIMITS.default_city_radius_miles,
                            "distance_unit": "mile",
                        }
                    )
            elif loc.type is LocationType.REGION:
                key = _keyed_lookup(loc, "regions")
                if key and ("r", key) not in seen:
                    seen.add(("r", key))
                    regions.append({"key": key})
            elif loc.type is LocationType.ZIP:
                key = loc.code or loc.name
                if key and ("z", key) not in seen:
                    seen.add(("z", key))
                    zips.append({"key": key})

        geo: Dict[str, List[Any]] = {}
        if countries:
            geo["countries"] = countries
        if cities:
            geo["cities"] = cities
        if regions:
            geo["regions"] = regions
        if zips:
            geo["zips"] = zips
        return geo

    def validate(self, targeting: Mapping[str, Any]) -> ValidationReport:
        report = ValidationReport()
        check_age_range(report, targeting.get("age_min"), targeting.get("age_max"))
        geo = targeting.get("geo_locations") or {}
        if not any(geo.get(bucket) for bucket in ("countries", "cities", "regions", "zips")):
            report.error("At least one location is required")
        return report


def _keyed_lookup(loc: UnifiedLocation, bucket: str) -> str:
    """Mapping entry of the same bucket type wins, then an explicit code."""
    hit = get_meta_geo_key(loc.name)
    if hit is not None and hit.bucket == bucket:
        return hit.key
    return loc.code or ""
