"""Campaign distributors: the orchestration boundary per platform."""

from .base import CampaignDistributor, DistributionState
from .fanout import distribute_all
from .google import GoogleCampaignDistributor
from .meta import MetaCampaignDistributor
from .registry import DISTRIBUTORS, get_distributor
from .tiktok import TikTokCampaignDistributor

__all__ = [
    "CampaignDistributor",
    "DistributionState",
    "MetaCampaignDistributor",
    "GoogleCampaignDistributor",
    "TikTokCampaignDistributor",
    "DISTRIBUTORS",
    "get_distributor",
    "distribute_all",
]
