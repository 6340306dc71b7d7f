"""Service layer: caches and stores.

Stores depend on the ApiClient protocol, not on a concrete client,
making them testable with in-memory fakes.

Architecture:
    Handler -> Store -> ApiClient
    (HTTP)  -> (Cache) -> (Remote API)

Usage:
    ```python
    from timeoff_cache.services import StoreContext

    async with StoreContext.create() as ctx:
        requests = await ctx.requests.fetch_requests()
    ```
"""

from .base_store import BaseStore
from .context import StoreContext
from .notification_store import NotificationState, NotificationStore, count_unread
from .request_store import RequestState, RequestStore
from .scheduler import PeriodicRefresher
from .ttl_cache import FetchOutcome, FetchResult, TTLCache

__all__ = [
    "BaseStore",
    "FetchOutcome",
    "FetchResult",
    "NotificationState",
    "NotificationStore",
    "PeriodicRefresher",
    "RequestState",
    "RequestStore",
    "StoreContext",
    "TTLCache",
    "count_unread",
]
