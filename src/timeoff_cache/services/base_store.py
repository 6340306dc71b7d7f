"""Shared machinery for the cache-backed stores.

A store owns a TTLCache and an immutable state snapshot. Consumers read
``store.state`` or subscribe to changes; only the store replaces the
snapshot, and always wholesale.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import replace
from typing import Any, Generic, TypeVar

import structlog

from timeoff_cache.entities import CacheInfo, CacheKey
from timeoff_cache.exceptions import TransportError
from timeoff_cache.protocols import ApiClient

from .ttl_cache import FetchResult, TTLCache

S = TypeVar("S")
T = TypeVar("T")

Listener = Callable[[S], None]

logger = structlog.get_logger(__name__)


class BaseStore(ABC, Generic[S]):
    """Base class for RequestStore and NotificationStore.

    Subclasses implement ``fetch`` and ``force_refresh`` and describe
    their state as a frozen dataclass.
    """

    def __init__(
        self,
        api: ApiClient,
        initial_state: S,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
        name: str = "store",
    ) -> None:
        """Initialize the store.

        Args:
            api: Remote API client (required).
            initial_state: Empty state snapshot.
            ttl: Cache freshness window in seconds. Defaults to settings.
            clock: Time source shared with the cache.
            name: Label used in log events.
        """
        self._api = api
        self._name = name
        self._cache = TTLCache(ttl=ttl, clock=clock, name=name)
        self._state = initial_state
        self._listeners: list[Listener[S]] = []
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def state(self) -> S:
        """Current read-only snapshot."""
        return self._state

    @property
    def cache(self) -> TTLCache:
        """Get the underlying cache (for debugging and testing)."""
        return self._cache

    @property
    def api(self) -> ApiClient:
        return self._api

    @property
    def name(self) -> str:
        return self._name

    def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes: Any) -> None:
        self._replace_state(replace(self._state, **changes))

    def _replace_state(self, new_state: S) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    async def _cached_fetch(
        self,
        key: CacheKey[T],
        loader: Callable[[], Awaitable[T]],
        mark_loading: bool = True,
    ) -> FetchResult[T]:
        """Run a cache fetch, flagging ``is_loading`` only when the network is hit."""
        cached = self._cache.get(key)
        if mark_loading and (cached is None or not self._cache.is_fresh(cached)):
            self._set_state(is_loading=True, error=None)
        return await self._cache.fetch(key, loader)

    @abstractmethod
    async def fetch(self) -> Any:
        """Return the store's primary list, from cache when fresh."""

    @abstractmethod
    async def force_refresh(self) -> Any:
        """Drop every cached entry and reload from the API."""

    def invalidate(self, keys: Iterable[CacheKey[Any] | str] | None = None) -> list[str]:
        """Evict the given keys (all keys if None) without fetching."""
        removed = self._cache.invalidate(keys)
        logger.info("store_invalidated", store=self._name, keys=removed)
        return removed

    def get_cache_info(self) -> dict[str, CacheInfo]:
        return self._cache.get_cache_info()

    def optimistic_mutate(
        self,
        mutation: Callable[[S], S],
        remote_call: Callable[[], Awaitable[Any]],
        invalidates: Iterable[CacheKey[Any]],
        operation: str = "mutation",
    ) -> "asyncio.Task[bool]":
        """Apply a local change now and confirm it remotely in the background.

        The mutation and the invalidation happen before this method
        returns. The remote call runs as a task; if it fails the store
        resynchronizes with one ``force_refresh()`` instead of undoing
        the change field by field.

        Must be called from a running event loop.

        Args:
            mutation: Pure function producing the optimistic snapshot
            remote_call: Coroutine factory confirming the change
            invalidates: Cache keys whose values the change makes wrong
            operation: Label used in log events

        Returns:
            Task resolving to True if the remote call succeeded, False
            if a resync was performed
        """
        self._replace_state(mutation(self._state))
        self._cache.invalidate(invalidates)

        task = asyncio.get_running_loop().create_task(
            self._confirm(remote_call, operation),
            name=f"{self._name}:{operation}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _confirm(self, remote_call: Callable[[], Awaitable[Any]], operation: str) -> bool:
        try:
            await remote_call()
        except TransportError as e:
            logger.warning("optimistic_resync", store=self._name, operation=operation, error=str(e))
            await self.force_refresh()
            return False
        return True

    async def wait_pending(self) -> None:
        """Wait for outstanding optimistic confirmations to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
