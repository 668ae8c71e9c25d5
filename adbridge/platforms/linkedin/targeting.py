"""Unified targeting -> LinkedIn ``targetingCriteria`` facets (URN lists)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, TypedDict

from adbridge.mappings.interests import get_interest_id
from adbridge.mappings.languages import linkedin_locale
from adbridge.mappings.locations import get_location_id
from adbridge.models import Platform, UnifiedTargeting, ValidationReport
from adbridge.platforms.base import dedupe

AGE_BRACKETS: Tuple[Tuple[int, int], ...] = (
    (18, 24),
    (25, 34),
    (35, 54),
    (55, 2147483647),
)

COMPANY_SIZES: Dict[str, str] = {
    "self-employed": "A",
    "1-10": "B",
    "11-50": "C",
    "51-200": "D",
    "201-500": "E",
    "501-1000": "F",
    "1001-5000": "G",
    "5001-10000": "H",
    "10001+": "I",
}
DEFAULT_COMPANY_SIZE = "C"

SENIORITIES: Dict[str, int] = {
    "unpaid": 1,
    "training": 2,
    "entry": 3,
    "senior": 4,
    "manager": 5,
    "director": 6,
    "vp": 7,
    "cxo": 8,
    "partner": 9,
    "owner": 10,
}
DEFAULT_SENIORITY = 3

# facets that count as professional targeting
PROFESSIONAL_FACETS = ("jobTitles", "jobFunctions", "companies", "industries", "seniorities")

TARGETING_SUGGESTIONS: Dict[str, List[str]] = {
    "leads": [
        "Consider targeting decision-makers (Director, VP, CXO seniority)",
        "Use job functions relevant to your product (e.g., Marketing, IT, Finance)",
        "Target companies of specific sizes that match your ideal customer",
    ],
    "awareness": [
        "Broaden your targeting to include multiple seniority levels",
        "Consider industry-wide targeting rather than specific companies",
        "Include both managers and individual contributors",
    ],
    "conversions": [
        "Target specific job titles that align with buying power",
        "Focus on decision-maker seniorities (Manager and above)",
        "Consider targeting specific companies in your TAM",
    ],
}


class LinkedInFacets(TypedDict, total=False):
    locations: List[str]
    ageRanges: List[str]
    genders: List[str]
    interfaceLocales: List[str]
    interests: List[str]
    jobTitles: List[str]
    jobFunctions: List[str]
    companies: List[str]
    companySizes: List[str]
    industries: List[str]
    seniorities: List[str]
    skills: List[str]
    degrees: List[str]
    fieldsOfStudy: List[str]


class LinkedInTargeting(TypedDict):
    includedTargetingFacets: LinkedInFacets


def age_range_urn(age_min: int, age_max: int) -> str:
    """Bracket containing the range, else the first bracket reaching ``age_min``."""
    picked: Optional[Tuple[int, int]] = None
    for lo, hi in AGE_BRACKETS:
        if age_min >= lo and age_max <= hi:
            picked = (lo, hi)
            break
    if picked is None:
        picked = next(((lo, hi) for lo, hi in AGE_BRACKETS if age_min <= hi), AGE_BRACKETS[-1])
    return f"urn:li:ageRange:({picked[0]},{picked[1]})"


def company_size_urn(size: str) -> str:
    return f"urn:li:organizationSize:{COMPANY_SIZES.get(size.strip().lower(), DEFAULT_COMPANY_SIZE)}"


def seniority_urn(level: str) -> str:
    return f"urn:li:seniority:{SENIORITIES.get(level.strip().lower(), DEFAULT_SENIORITY)}"


def _urns(prefix: str, values: List[str]) -> List[str]:
    return dedupe(v if v.startswith("urn:li:") else f"urn:li:{prefix}:{v}" for v in values if v)


class LinkedInTargetingTransformer:
    platform = Platform.LINKEDIN

    def transform(self, unified: UnifiedTargeting) -> LinkedInTargeting:
        facets: LinkedInFacets = {"ageRanges": [age_range_urn(unified.age_min, unified.age_max)]}

        if not unified.targets_all_genders:
            facets["genders"] = dedupe(f"urn:li:gender:{g.value.upper()}" for g in unified.genders)

        if unified.locations:
            facets["locations"] = dedupe(get_location_id(loc.name, Platform.LINKEDIN) for loc in unified.locations)

        if unified.languages:
            facets["interfaceLocales"] = dedupe(f"urn:li:locale:{linkedin_locale(lang)}" for lang in unified.languages)

        interests = dedupe(get_interest_id(i, Platform.LINKEDIN) for i in unified.interests)
        if interests:
            facets["interests"] = [str(i) for i in interests]

        ext = unified.linkedin
        if ext is not None:
            pairs = (
                ("jobTitles", _urns("title", ext.job_titles)),
                ("jobFunctions", _urns("function", ext.job_functions)),
                ("companies", _urns("organization", ext.companies)),
                ("companySizes", dedupe(company_size_urn(s) for s in ext.company_sizes)),
                ("industries", _urns("industry", ext.industries)),
                ("seniorities", dedupe(seniority_urn(s) for s in ext.seniority)),
                ("skills", _urns("skill", ext.skills)),
                ("degrees", _urns("degree", ext.degrees)),
                ("fieldsOfStudy", _urns("fieldOfStudy", ext.fields_of_study)),
            )
            for key, values in pairs:
                if values:
                    facets[key] = values  # type: ignore[literal-required]

        return {"includedTargetingFacets": facets}

    def validate(self, targeting: Mapping[str, Any]) -> ValidationReport:
        report = ValidationReport()
        facets = targeting.get("includedTargetingFacets") or {}
        if not facets.get("locations"):
            report.error("At least one location is required")
        if not any(facets.get(k) for k in PROFESSIONAL_FACETS):
            report.error(
                "LinkedIn requires at least one professional targeting facet "
                "(job title, function, company, industry, or seniority)"
            )
        return report


def to_targeting_criteria(targeting: Mapping[str, Any]) -> Dict[str, Any]:
    """Facet lists -> the REST ``targetingCriteria`` and/or tree."""
    facets = targeting.get("includedTargetingFacets") or {}
    clauses = [
        {"or": {f"urn:li:adTargetingFacet:{name}": list(values)}}
        for name, values in facets.items()
        if values
    ]
    return {"include": {"and": clauses}}


def get_targeting_suggestions(objective: str) -> List[str]:
    return list(TARGETING_SUGGESTIONS.get(str(objective), TARGETING_SUGGESTIONS["leads"]))
