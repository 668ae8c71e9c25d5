# adbridge/mappings/__init__.py
"""Pure lookup tables. No logic beyond dict lookup with a documented fallback."""

from .call_to_action import normalize_call_to_action, to_platform_call_to_action
from .interests import get_interest_id, get_supported_interests
from .locations import get_country_code, get_location_id, get_supported_locations
from .objectives import get_platform_objective, get_supported_objectives

__all__ = [
    "get_interest_id",
    "get_supported_interests",
    "get_country_code",
    "get_location_id",
    "get_supported_locations",
    "get_platform_objective",
    "get_supported_objectives",
    "normalize_call_to_action",
    "to_platform_call_to_action",
]
