from .api_client import LinkedInApiClient
from .targeting import LinkedInTargetingTransformer

__all__ = ["LinkedInApiClient", "LinkedInTargetingTransformer"]
