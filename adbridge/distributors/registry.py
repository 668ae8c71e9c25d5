from __future__ import annotations

from typing import Any, Dict, Type

from adbridge.models import Platform

from .base import CampaignDistributor
from .google import GoogleCampaignDistributor
from .meta import MetaCampaignDistributor
from .tiktok import TikTokCampaignDistributor

# LinkedIn has a client and transformer but no distributor
DISTRIBUTORS: Dict[Platform, Type[CampaignDistributor]] = {
    Platform.META: MetaCampaignDistributor,
    Platform.GOOGLE: GoogleCampaignDistributor,
    Platform.TIKTOK: TikTokCampaignDistributor,
}


def get_distributor(platform: Any, **kwargs: Any) -> CampaignDistributor:
    p = Platform.parse(platform)
    if p not in DISTRIBUTORS:
        raise KeyError(f"no distributor for platform {p.value!r}")
    return DISTRIBUTORS[p](**kwargs)
