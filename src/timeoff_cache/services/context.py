"""Process-scoped wiring of the API client and both stores."""

import asyncio

import structlog

from timeoff_cache.config import Settings, settings as default_settings
from timeoff_cache.protocols import ApiClient
from timeoff_cache.repositories import HttpApiClient

from .notification_store import NotificationStore
from .request_store import RequestStore

logger = structlog.get_logger(__name__)


class StoreContext:
    """Owns one API client, one RequestStore and one NotificationStore.

    Entering the context starts the unread-count poller; leaving it stops
    the poller, drains pending optimistic confirmations and closes the
    client if the context created it.

    Example:
        ```python
        async with StoreContext.create() as ctx:
            await ctx.requests.fetch_requests()
            await ctx.notifications.fetch_notifications()
        ```
    """

    def __init__(
        self,
        api: ApiClient,
        requests: RequestStore,
        notifications: NotificationStore,
        owns_client: bool = False,
    ) -> None:
        self.api = api
        self.requests = requests
        self.notifications = notifications
        self._owns_client = owns_client

    @classmethod
    def create(
        cls,
        api: ApiClient | None = None,
        config: Settings | None = None,
    ) -> "StoreContext":
        """Build stores from settings.

        Args:
            api: Client to use. If None, an HttpApiClient is created and
                closed with the context.
            config: Settings override. If None, uses the global settings.
        """
        config = config or default_settings
        owns_client = api is None
        if api is None:
            api = HttpApiClient(
                base_url=config.api_base_url,
                token=config.api_token,
                timeout=config.api_timeout,
            )

        return cls(
            api=api,
            requests=RequestStore(api, ttl=config.cache_ttl),
            notifications=NotificationStore(
                api,
                ttl=config.cache_ttl,
                poll_interval=config.unread_refresh_interval,
            ),
            owns_client=owns_client,
        )

    async def refresh_all(self) -> None:
        """Force-refresh both stores concurrently."""
        await asyncio.gather(self.requests.force_refresh(), self.notifications.force_refresh())

    async def __aenter__(self) -> "StoreContext":
        self.notifications.start_polling()
        logger.info("store_context_started", poll_interval=self.notifications.poller.interval)
        return self

    async def __aexit__(self, *exc_info) -> None:
        try:
            await self.notifications.stop_polling()
            await asyncio.gather(self.requests.wait_pending(), self.notifications.wait_pending())
        finally:
            if self._owns_client and isinstance(self.api, HttpApiClient):
                await self.api.close()
            logger.info("store_context_stopped")
