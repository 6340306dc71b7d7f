"""Repository layer for data access.

This layer hides the remote HTTP API behind the ApiClient protocol, so
stores can be exercised against in-memory fakes.
"""

from timeoff_cache.protocols import ApiClient

from .http_api_client import HttpApiClient

__all__ = [
    "ApiClient",
    "HttpApiClient",
]
