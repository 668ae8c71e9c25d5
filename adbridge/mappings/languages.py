"""Language names -> platform language ids. Unknown names fall back to English."""

from __future__ import annotations

from typing import Dict

META_LOCALES: Dict[str, int] = {
    "English": 6,
    "Spanish": 3,
    "French": 2,
    "German": 8,
    "Italian": 10,
    "Portuguese": 11,
    "Chinese": 13,
    "Japanese": 14,
    "Korean": 15,
}
META_DEFAULT_LOCALE = 6

GOOGLE_LANGUAGE_IDS: Dict[str, int] = {
    "English": 1000,
    "Spanish": 1003,
    "French": 1002,
    "German": 1001,
    "Italian": 1004,
    "Portuguese": 1014,
    "Chinese": 1017,  # simplified
    "Japanese": 1005,
    "Korean": 1012,
    "Arabic": 1019,
    "Russian": 1020,
    "Hindi": 1023,
    "Dutch": 1010,
    "Polish": 1025,
    "Turkish": 1037,
}
GOOGLE_DEFAULT_LANGUAGE = 1000

TIKTOK_LANGUAGE_CODES: Dict[str, str] = {
    "English": "en",
    "Spanish": "es",
    "French": "fr",
    "German": "de",
    "Italian": "it",
    "Portuguese": "pt",
    "Chinese": "zh",
    "Japanese": "ja",
    "Korean": "ko",
    "Arabic": "ar",
    "Russian": "ru",
    "Hindi": "hi",
}
TIKTOK_DEFAULT_LANGUAGE = "en"

LINKEDIN_LOCALES: Dict[str, str] = {
    "English": "en_US",
    "Spanish": "es_ES",
    "French": "fr_FR",
    "German": "de_DE",
    "Italian": "it_IT",
    "Portuguese": "pt_BR",
    "Chinese": "zh_CN",
    "Japanese": "ja_JP",
    "Korean": "ko_KR",
}
LINKEDIN_DEFAULT_LOCALE = "en_US"


def meta_locale(language: str) -> int:
    return META_LOCALES.get(language, META_DEFAULT_LOCALE)


def google_language_id(language: str) -> int:
    return GOOGLE_LANGUAGE_IDS.get(language, GOOGLE_DEFAULT_LANGUAGE)


def tiktok_language_code(language: str) -> str:
    return TIKTOK_LANGUAGE_CODES.get(language, TIKTOK_DEFAULT_LANGUAGE)


def linkedin_locale(language: str) -> str:
    return LINKEDIN_LOCALES.get(language, LINKEDIN_DEFAULT_LOCALE)
