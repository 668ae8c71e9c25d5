from __future__ import annotations

import pytest

from adbridge.models import Gender, LinkedInExtension, LocationType, UnifiedLocation, UnifiedTargeting
from adbridge.platforms.linkedin.targeting import (
    LinkedInTargetingTransformer,
    age_range_urn,
    company_size_urn,
    seniority_urn,
    to_targeting_criteria,
)

US = UnifiedLocation(LocationType.COUNTRY, "United States")


def _t(**kw) -> UnifiedTargeting:
    kw.setdefault("locations", [US])
    return UnifiedTargeting(**kw)


@pytest.mark.parametrize(
    "lo,hi,expected",
    [
        (18, 24, "urn:li:ageRange:(18,24)"),
        (26, 30, "urn:li:ageRange:(25,34)"),
        (35, 54, "urn:li:ageRange:(35,54)"),
        (60, 65, "urn:li:ageRange:(55,2147483647)"),
        # spans brackets -> first bracket reaching the minimum
        (25, 44, "urn:li:ageRange:(25,34)"),
    ],
)
def test_age_range_urn(lo, hi, expected):
    assert age_range_urn(lo, hi) == expected


def test_company_size_and_seniority_defaults():
    assert company_size_urn("51-200") == "urn:li:organizationSize:D"
    assert company_size_urn("huge") == "urn:li:organizationSize:C"
    assert seniority_urn("Director") == "urn:li:seniority:6"
    assert seniority_urn("intern-ish") == "urn:li:seniority:3"


def test_transform_facets():
    ext = LinkedInExtension(
        job_titles=["123", "urn:li:title:9"],
        industries=["4"],
        company_sizes=["11-50"],
        seniority=["vp"],
    )
    out = LinkedInTargetingTransformer().transform(
        _t(genders=[Gender.FEMALE], languages=["German"], interests=["Marketing"], linkedin=ext)
    )
    facets = out["includedTargetingFacets"]
    assert facets["locations"] == ["urn:li:geo:103644278"]
    assert facets["genders"] == ["urn:li:gender:FEMALE"]
    assert facets["interfaceLocales"] == ["urn:li:locale:de_DE"]
    assert facets["interests"] == ["urn:li:interest:3"]
    assert facets["jobTitles"] == ["urn:li:title:123", "urn:li:title:9"]
    assert facets["industries"] == ["urn:li:industry:4"]
    assert facets["companySizes"] == ["urn:li:organizationSize:C"]
    assert facets["seniorities"] == ["urn:li:seniority:7"]


def test_all_genders_omitted():
    facets = LinkedInTargetingTransformer().transform(_t())["includedTargetingFacets"]
    assert "genders" not in facets


def test_professional_facet_required():
    tr = LinkedInTargetingTransformer()
    report = tr.validate(tr.transform(_t()))
    assert len(report.errors) == 1
    assert report.errors[0].startswith("LinkedIn requires at least one professional targeting facet")

    ok = tr.validate(tr.transform(_t(linkedin=LinkedInExtension(seniority=["cxo"]))))
    assert ok.valid


def test_targeting_criteria_tree():
    tr = LinkedInTargetingTransformer()
    criteria = to_targeting_criteria(tr.transform(_t(linkedin=LinkedInExtension(industries=["4"]))))
    clauses = criteria["include"]["and"]
    assert {"or": {"urn:li:adTargetingFacet:industries": ["urn:li:industry:4"]}} in clauses
    assert {"or": {"urn:li:adTargetingFacet:locations": ["urn:li:geo:103644278"]}} in clauses
