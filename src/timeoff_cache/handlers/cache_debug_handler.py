"""HTTP handlers for cache debugging.

Handlers convert between store calls and response DTOs and handle HTTP
concerns like status codes and error responses.
"""

from fastapi import HTTPException, status

from timeoff_cache.dto import (
    CacheDebugResponse,
    CacheInfoItem,
    CacheInvalidateResponse,
    CacheRefreshResponse,
    StoreCacheInfo,
)
from timeoff_cache.services import BaseStore, StoreContext


def _store_info(store: BaseStore) -> StoreCacheInfo:
    info = store.get_cache_info()
    return StoreCacheInfo(
        size=len(info),
        ttl_seconds=store.cache.ttl,
        entries={key: CacheInfoItem(age=i.age, fresh=i.fresh) for key, i in info.items()},
    )


class CacheDebugHandler:
    """HTTP handlers exposing cache state of both stores.

    Example:
        ```python
        handler = CacheDebugHandler(context=StoreContext.create())

        @app.get("/debug/cache", response_model=CacheDebugResponse)
        async def cache_info():
            return await handler.get_cache_info()
        ```
    """

    def __init__(self, context: StoreContext) -> None:
        """Initialize the handler.

        Args:
            context: The stores to inspect (required).
        """
        self._context = context

    def _stores(self, store: str | None) -> list[BaseStore]:
        stores = {
            "requests": self._context.requests,
            "notifications": self._context.notifications,
        }
        if store is None:
            return list(stores.values())
        if store not in stores:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown store '{store}', expected one of {sorted(stores)}",
            )
        return [stores[store]]

    async def get_cache_info(self) -> CacheDebugResponse:
        """Handle GET /debug/cache requests."""
        requests = self._context.requests
        notifications = self._context.notifications

        return CacheDebugResponse(
            requests=_store_info(requests),
            notifications=_store_info(notifications),
            request_count=len(requests.state.requests),
            notification_count=len(notifications.state.notifications),
            unread_count=notifications.state.unread_count,
            polling=notifications.poller.is_running,
        )

    async def refresh_all(self) -> CacheRefreshResponse:
        """Handle POST /debug/cache/refresh requests.

        Raises:
            HTTPException: If a store fails unexpectedly
        """
        try:
            await self._context.refresh_all()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to refresh cache: {e}",
            ) from e

        requests = self._context.requests.state
        notifications = self._context.notifications.state
        errors = [e for e in (requests.error, notifications.error) if e]

        return CacheRefreshResponse(
            success=not errors,
            request_count=len(requests.requests),
            notification_count=len(notifications.notifications),
            unread_count=notifications.unread_count,
            errors=errors,
        )

    async def invalidate(self, store: str | None = None, key: str | None = None) -> CacheInvalidateResponse:
        """Handle DELETE /debug/cache and DELETE /debug/cache/{key} requests."""
        keys = [key] if key is not None else None
        removed: list[str] = []
        for target in self._stores(store):
            removed.extend(target.invalidate(keys))

        if key is not None:
            message = f"Invalidated cache key '{key}'" if removed else f"No entry for '{key}'"
        else:
            message = "Cache cleared successfully"

        return CacheInvalidateResponse(success=True, invalidated=removed, message=message)

    async def health_check(self) -> dict:
        """Handle GET /health requests."""
        return {
            "status": "healthy",
            "polling": self._context.notifications.poller.is_running,
        }
