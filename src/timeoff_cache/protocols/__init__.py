"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the HTTP client for an in-memory fake in tests
- Clear separation between stores and transport

Usage:
    ```python
    from timeoff_cache.protocols import ApiClient

    client: ApiClient = HttpApiClient.create()   # works
    client: ApiClient = FakeApiClient()          # also works
    ```
"""

from .api_client import ApiClient

__all__ = [
    "ApiClient",
]
