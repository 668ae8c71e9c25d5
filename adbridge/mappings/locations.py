"""Location names -> platform geo ids.

Only names present here resolve; everything else is dropped by the
transformers and caught by their ``validate`` when nothing is left.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, NamedTuple, Optional, Union

from adbridge.models import Platform

LocationId = Union[str, int]


class MetaGeoKey(NamedTuple):
    key: str
    bucket: str  # countries | cities | regions


META_LOCATIONS: Dict[str, MetaGeoKey] = {
    # Countries
    "United States": MetaGeoKey("US", "countries"),
    "United Kingdom": MetaGeoKey("GB", "countries"),
    "Canada": MetaGeoKey("CA", "countries"),
    "Australia": MetaGeoKey("AU", "countries"),
    "Germany": MetaGeoKey("DE", "countries"),
    "France": MetaGeoKey("FR", "countries"),
    # Major cities
    "New York": MetaGeoKey("2490299", "cities"),
    "Los Angeles": MetaGeoKey("2442047", "cities"),
    "Chicago": MetaGeoKey("2379574", "cities"),
    "London": MetaGeoKey("2418046", "cities"),
    "Paris": MetaGeoKey("2988507", "cities"),
    "Toronto": MetaGeoKey("293912", "cities"),
    "Sydney": MetaGeoKey("1105779", "cities"),
}

# Google Ads geo target constants
GOOGLE_LOCATIONS: Dict[str, int] = {
    "United States": 2840,
    "United Kingdom": 2826,
    "Canada": 2124,
    "Australia": 2036,
    "Germany": 2276,
    "France": 2250,
    "New York": 1023191,
    "Los Angeles": 1013962,
    "Chicago": 1014044,
    "London": 1006886,
    "Paris": 1006094,
    "Toronto": 9062410,
    "Sydney": 1007849,
}

LINKEDIN_LOCATIONS: Dict[str, str] = {
    "United States": "urn:li:geo:103644278",
    "United Kingdom": "urn:li:geo:101165590",
    "Canada": "urn:li:geo:101174742",
    "Australia": "urn:li:geo:101452733",
    "Germany": "urn:li:geo:101282230",
    "France": "urn:li:geo:105015875",
    "New York": "urn:li:geo:102571732",
    "Los Angeles": "urn:li:geo:102448103",
    "Chicago": "urn:li:geo:103112676",
    "London": "urn:li:geo:90009496",
    "Paris": "urn:li:geo:105117694",
    "Toronto": "urn:li:geo:100436921",
    "Sydney": "urn:li:geo:104769905",
}

# TikTok location ids (GeoNames)
TIKTOK_LOCATIONS: Dict[str, int] = {
    "United States": 6252001,
    "United Kingdom": 2635167,
    "Canada": 6251999,
    "Australia": 2077456,
    "Germany": 2921044,
    "France": 3017382,
    "New York": 5128581,
    "Los Angeles": 5368361,
    "Chicago": 4887398,
    "London": 2643743,
    "Paris": 2988507,
    "Toronto": 6167865,
    "Sydney": 2147714,
}

COUNTRY_CODES: Dict[str, str] = {
    "United States": "US",
    "United Kingdom": "GB",
    "Canada": "CA",
    "Australia": "AU",
    "Germany": "DE",
    "France": "FR",
    "Spain": "ES",
    "Italy": "IT",
    "Japan": "JP",
    "China": "CN",
    "India": "IN",
    "Brazil": "BR",
    "Mexico": "MX",
}

LOCATIONS_BY_PLATFORM: Mapping[Platform, Mapping[str, object]] = {
    Platform.META: META_LOCATIONS,
    Platform.GOOGLE: GOOGLE_LOCATIONS,
    Platform.LINKEDIN: LINKEDIN_LOCATIONS,
    Platform.TIKTOK: TIKTOK_LOCATIONS,
}


def get_country_code(country_name: str) -> Optional[str]:
    return COUNTRY_CODES.get(country_name)


def get_meta_geo_key(name: str) -> Optional[MetaGeoKey]:
    return META_LOCATIONS.get(name)


def get_location_id(name: str, platform: Platform) -> Optional[LocationId]:
    """Google / LinkedIn / TikTok id for a location name (Meta: its key)."""
    platform = Platform.parse(platform)
    if platform is Platform.META:
        hit = META_LOCATIONS.get(name)
        return hit.key if hit else None
    table = LOCATIONS_BY_PLATFORM[platform]
    value = table.get(name)
    return value  # type: ignore[return-value]


def get_supported_locations(platform: Platform) -> List[str]:
    return list(LOCATIONS_BY_PLATFORM.get(Platform.parse(platform), {}).keys())
