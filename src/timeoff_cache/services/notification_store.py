"""Cache-backed store for notifications and the unread count."""

import asyncio
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone

import structlog
from pydantic import ValidationError

from timeoff_cache.config import settings
from timeoff_cache.dto import UnreadCountPayload, parse_notifications
from timeoff_cache.entities import NOTIFICATIONS, UNREAD_COUNT, Notification
from timeoff_cache.exceptions import TransportError
from timeoff_cache.protocols import ApiClient

from .base_store import BaseStore
from .scheduler import PeriodicRefresher
from .ttl_cache import FetchOutcome

logger = structlog.get_logger(__name__)


def count_unread(notifications: tuple[Notification, ...]) -> int:
    return sum(1 for n in notifications if not n.read)


@dataclass(frozen=True)
class NotificationState:
    """Observable snapshot of the notification store."""

    notifications: tuple[Notification, ...] = ()
    unread_count: int = 0
    is_loading: bool = False
    error: str | None = None


class NotificationStore(BaseStore[NotificationState]):
    """Notifications plus a derived unread count.

    The unread count is recounted from the list whenever the list is
    replaced by a fetch, adjusted in place by optimistic read marks, and
    refreshed from ``/notifications/unread-count`` by a background poller
    while the store is entered as an async context manager.

    Example:
        ```python
        async with NotificationStore.create(api=client) as store:
            await store.fetch_notifications()
            store.mark_as_read("17")          # UI updates immediately
            print(store.state.unread_count)
        ```
    """

    def __init__(
        self,
        api: ApiClient,
        ttl: float | None = None,
        poll_interval: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the notification store.

        Args:
            api: Remote API client (required).
            ttl: Cache freshness window in seconds. Defaults to settings.
            poll_interval: Unread-count refresh period. Defaults to settings.
            clock: Time source shared with the cache.
        """
        super().__init__(api, NotificationState(), ttl=ttl, clock=clock, name="notifications")
        self._clock = clock
        self._poller = PeriodicRefresher(
            lambda: self.fetch_unread_count(force=True),
            interval=poll_interval if poll_interval is not None else settings.unread_refresh_interval,
            name="unread-count-poller",
        )

    @classmethod
    def create(
        cls,
        api: ApiClient,
        ttl: float | None = None,
        poll_interval: float | None = None,
    ) -> "NotificationStore":
        """Factory method to create NotificationStore with defaults."""
        return cls(api=api, ttl=ttl, poll_interval=poll_interval)

    @property
    def poller(self) -> PeriodicRefresher:
        return self._poller

    async def _load_notifications(self) -> tuple[Notification, ...]:
        raw = await self._api.get_notifications()
        try:
            return parse_notifications(raw)
        except ValidationError as e:
            raise TransportError(f"Malformed notifications payload: {e.error_count()} errors") from e

    async def _load_unread_count(self) -> int:
        raw = await self._api.get_unread_count()
        try:
            return UnreadCountPayload.model_validate(raw).count
        except ValidationError as e:
            raise TransportError("Malformed unread-count payload") from e

    async def fetch_notifications(self) -> tuple[Notification, ...]:
        """Return notifications from cache if fresh, otherwise from the API.

        Replacing the list recounts ``unread_count``. Never raises on
        transport failure.
        """
        result = await self._cached_fetch(NOTIFICATIONS, self._load_notifications)

        if result.outcome is FetchOutcome.HIT:
            return result.entry.data

        if result.outcome in (FetchOutcome.FETCHED, FetchOutcome.STALE_FALLBACK):
            notifications = result.entry.data
            self._set_state(
                notifications=notifications,
                unread_count=count_unread(notifications),
                is_loading=False,
                error=None if result.from_network else "Failed to fetch notifications",
            )
            return notifications

        self._set_state(is_loading=False, error="Failed to fetch notifications")
        return self._state.notifications

    async def fetch(self) -> tuple[Notification, ...]:
        return await self.fetch_notifications()

    async def fetch_unread_count(self, force: bool = False) -> int:
        """Return the server's unread count, cached under ``unreadCount``.

        Args:
            force: Skip the freshness check (used by the poller)
        """
        if force:
            self._cache.invalidate([UNREAD_COUNT])

        result = await self._cached_fetch(UNREAD_COUNT, self._load_unread_count, mark_loading=False)

        if result.outcome is FetchOutcome.HIT:
            return result.entry.data

        if result.outcome is FetchOutcome.FETCHED:
            self._set_state(unread_count=result.entry.data)
            return result.entry.data

        # A stale count would overwrite a newer recount of the list
        return self._state.unread_count

    async def force_refresh(self) -> tuple[Notification, ...]:
        """Drop every cached entry and reload the list from the API."""
        logger.info("force_refresh", store=self._name)
        self._cache.invalidate()
        return await self.fetch_notifications()

    def mark_as_read(self, notification_id: str) -> "asyncio.Task[bool]":
        """Mark one notification read.

        The list and the count change before this returns; the server is
        told in the background and a failure triggers a resync.
        """

        def mutation(state: NotificationState) -> NotificationState:
            changed = False
            notifications = []
            for n in state.notifications:
                if n.id == notification_id and not n.read:
                    n = replace(n, read=True)
                    changed = True
                notifications.append(n)

            unread_count = max(0, state.unread_count - 1) if changed else state.unread_count
            return replace(state, notifications=tuple(notifications), unread_count=unread_count)

        return self.optimistic_mutate(
            mutation,
            lambda: self._api.mark_notification_as_read(notification_id),
            invalidates=(NOTIFICATIONS, UNREAD_COUNT),
            operation="mark_as_read",
        )

    def mark_all_as_read(self) -> "asyncio.Task[bool]":
        """Mark every notification read, optimistically."""

        def mutation(state: NotificationState) -> NotificationState:
            notifications = tuple(n if n.read else replace(n, read=True) for n in state.notifications)
            return replace(state, notifications=notifications, unread_count=0)

        return self.optimistic_mutate(
            mutation,
            self._api.mark_all_notifications_as_read,
            invalidates=(NOTIFICATIONS, UNREAD_COUNT),
            operation="mark_all_as_read",
        )

    def add_notification(self, type: str, message: str) -> Notification:
        """Push a local-only unread notification to the top of the list."""
        notification = Notification(
            id=uuid.uuid4().hex[:7],
            type=type,
            message=message,
            read=False,
            created_at=datetime.fromtimestamp(self._clock(), tz=timezone.utc),
        )
        self._set_state(
            notifications=(notification, *self._state.notifications),
            unread_count=self._state.unread_count + 1,
        )
        self._cache.invalidate((NOTIFICATIONS, UNREAD_COUNT))
        return notification

    def start_polling(self) -> bool:
        """Start the unread-count poller (no-op if already running)."""
        return self._poller.start()

    async def stop_polling(self) -> None:
        await self._poller.stop()

    async def __aenter__(self) -> "NotificationStore":
        self.start_polling()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop_polling()
