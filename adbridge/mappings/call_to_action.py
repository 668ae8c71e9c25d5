"""Unified call-to-action labels -> platform CTA enums.

"Learn More", "LEARN_MORE" and "learn-more" all normalise to LEARN_MORE.
Anything unknown falls back to LEARN_MORE.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping

from adbridge.models import Platform

DEFAULT_CTA = "LEARN_MORE"

UNIFIED_CTAS = (
    "LEARN_MORE",
    "SHOP_NOW",
    "SIGN_UP",
    "DOWNLOAD",
    "CONTACT_US",
    "BOOK_NOW",
    "APPLY_NOW",
    "GET_QUOTE",
    "WATCH_MORE",
    "SUBSCRIBE",
)

META_CTAS: Dict[str, str] = {
    "LEARN_MORE": "LEARN_MORE",
    "SHOP_NOW": "SHOP_NOW",
    "SIGN_UP": "SIGN_UP",
    "DOWNLOAD": "DOWNLOAD",
    "CONTACT_US": "CONTACT_US",
    "BOOK_NOW": "BOOK_TRAVEL",
    "APPLY_NOW": "APPLY_NOW",
    "GET_QUOTE": "GET_QUOTE",
    "WATCH_MORE": "WATCH_MORE",
    "SUBSCRIBE": "SUBSCRIBE",
}

TIKTOK_CTAS: Dict[str, str] = {
    "LEARN_MORE": "LEARN_MORE",
    "SHOP_NOW": "SHOP_NOW",
    "SIGN_UP": "SIGN_UP",
    "DOWNLOAD": "DOWNLOAD",
    "CONTACT_US": "CONTACT_US",
    "BOOK_NOW": "BOOK_NOW",
    "APPLY_NOW": "APPLY_NOW",
    "WATCH_MORE": "WATCH_MORE",
    "SUBSCRIBE": "SUBSCRIBE",
}

LINKEDIN_CTAS: Dict[str, str] = {
    "LEARN_MORE": "LEARN_MORE",
    "SIGN_UP": "SIGN_UP",
    "DOWNLOAD": "DOWNLOAD",
    "APPLY_NOW": "APPLY",
    "GET_QUOTE": "REQUEST_DEMO",
    "SUBSCRIBE": "SUBSCRIBE",
    "CONTACT_US": "REGISTER",
}

# Google responsive display ads take free text (max 10 chars)
GOOGLE_CTAS: Dict[str, str] = {
    "LEARN_MORE": "Learn more",
    "SHOP_NOW": "Shop now",
    "SIGN_UP": "Sign up",
    "DOWNLOAD": "Download",
    "CONTACT_US": "Contact us",
    "BOOK_NOW": "Book now",
    "APPLY_NOW": "Apply now",
    "GET_QUOTE": "Get quote",
    "WATCH_MORE": "Watch now",
    "SUBSCRIBE": "Subscribe",
}

CTAS_BY_PLATFORM: Mapping[Platform, Mapping[str, str]] = {
    Platform.META: META_CTAS,
    Platform.GOOGLE: GOOGLE_CTAS,
    Platform.LINKEDIN: LINKEDIN_CTAS,
    Platform.TIKTOK: TIKTOK_CTAS,
}

_SEP = re.compile(r"[\s\-]+")


def normalize_call_to_action(label: str) -> str:
    if not label:
        return DEFAULT_CTA
    key = _SEP.sub("_", label.strip()).upper()
    return key if key in UNIFIED_CTAS else DEFAULT_CTA


def to_platform_call_to_action(label: str, platform: Platform) -> str:
    table = CTAS_BY_PLATFORM[Platform.parse(platform)]
    return table.get(normalize_call_to_action(label), table[DEFAULT_CTA])
