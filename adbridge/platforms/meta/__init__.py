from .api_client import MetaApiClient
from .targeting import MetaTargetingTransformer

__all__ = ["MetaApiClient", "MetaTargetingTransformer"]
