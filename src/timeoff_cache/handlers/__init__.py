"""Handler layer for HTTP endpoints.

Handlers depend on stores, not directly on the API client.

Architecture:
    Handler -> Store -> ApiClient
    (HTTP)  -> (Cache) -> (Remote API)
"""

from .cache_debug_handler import CacheDebugHandler

__all__ = [
    "CacheDebugHandler",
]
