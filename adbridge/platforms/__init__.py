"""Per-platform transformer/client pairs."""

from __future__ import annotations

from typing import Any, Dict, Type

from adbridge.models import Platform

from .base import PlatformApiClient, TargetingTransformer
from .google import GoogleAdsApiClient, GoogleTargetingTransformer
from .linkedin import LinkedInApiClient, LinkedInTargetingTransformer
from .meta import MetaApiClient, MetaTargetingTransformer
from .tiktok import TikTokApiClient, TikTokTargetingTransformer

TRANSFORMERS: Dict[Platform, Type[Any]] = {
    Platform.META: MetaTargetingTransformer,
    Platform.GOOGLE: GoogleTargetingTransformer,
    Platform.LINKEDIN: LinkedInTargetingTransformer,
    Platform.TIKTOK: TikTokTargetingTransformer,
}

API_CLIENTS: Dict[Platform, Type[PlatformApiClient]] = {
    Platform.META: MetaApiClient,
    Platform.GOOGLE: GoogleAdsApiClient,
    Platform.LINKEDIN: LinkedInApiClient,
    Platform.TIKTOK: TikTokApiClient,
}


def get_transformer(platform: Any) -> TargetingTransformer:
    return TRANSFORMERS[Platform.parse(platform)]()


def get_api_client_class(platform: Any) -> Type[PlatformApiClient]:
    return API_CLIENTS[Platform.parse(platform)]


__all__ = [
    "PlatformApiClient",
    "TargetingTransformer",
    "get_transformer",
    "get_api_client_class",
    "MetaApiClient",
    "GoogleAdsApiClient",
    "LinkedInApiClient",
    "TikTokApiClient",
]
