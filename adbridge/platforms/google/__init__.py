from .api_client import GoogleAdsApiClient
from .targeting import GoogleTargetingTransformer

__all__ = ["GoogleAdsApiClient", "GoogleTargetingTransformer"]
