"""Time-off Cache - client-side caching for the time-off request workflow.

This package keeps time-off requests and notifications close to their
consumers: fresh data is served from memory, stale data is served when
the API is down, and read marks are applied optimistically.

Layers:
    - protocols: Interface contracts (ApiClient)
    - repositories: Remote API implementation (HttpApiClient)
    - services: TTL cache, stores, background refresh
    - handlers: HTTP debug endpoint handlers
    - dto: Data transfer objects (API payloads and responses)
    - entities: Domain models (internal)

Usage:
    ```python
    from timeoff_cache.services import StoreContext

    async with StoreContext.create() as ctx:
        await ctx.notifications.fetch_notifications()
        ctx.notifications.mark_as_read("17")
    ```

For the debug HTTP API:
    ```python
    from timeoff_cache.api.app import app
    ```
"""

from timeoff_cache.config import get_settings, settings
from timeoff_cache.entities import (
    NOTIFICATIONS,
    REQUESTS,
    UNREAD_COUNT,
    CacheEntry,
    CacheInfo,
    CacheKey,
    Notification,
    TimeOffRequest,
)
from timeoff_cache.exceptions import AuthorizationError, TransportError
from timeoff_cache.handlers import CacheDebugHandler
from timeoff_cache.protocols import ApiClient
from timeoff_cache.repositories import HttpApiClient
from timeoff_cache.services import NotificationStore, RequestStore, StoreContext, TTLCache

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Errors
    "TransportError",
    "AuthorizationError",
    # Protocols (interfaces)
    "ApiClient",
    # Services
    "TTLCache",
    "RequestStore",
    "NotificationStore",
    "StoreContext",
    # Handlers (HTTP)
    "CacheDebugHandler",
    # Repositories (data access)
    "HttpApiClient",
    # Entities (domain models)
    "CacheEntry",
    "CacheInfo",
    "CacheKey",
    "Notification",
    "TimeOffRequest",
    "REQUESTS",
    "NOTIFICATIONS",
    "UNREAD_COUNT",
]
