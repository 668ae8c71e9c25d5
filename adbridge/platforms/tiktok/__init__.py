from .api_client import TikTokApiClient
from .targeting import TikTokTargetingTransformer

__all__ = ["TikTokApiClient", "TikTokTargetingTransformer"]
