"""Keyed TTL cache with stale-on-error fallback.

Each entry is a timestamped payload. A lookup younger than the TTL is
served without touching the network; an older or missing entry is
reloaded, and if the reload fails the stale entry (when there is one)
is served instead.
"""

import math
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog

from timeoff_cache.config import settings
from timeoff_cache.entities import CacheEntry, CacheInfo, CacheKey
from timeoff_cache.exceptions import TransportError

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class FetchOutcome(str, Enum):
    """How a fetch was satisfied."""

    HIT = "hit"
    FETCHED = "fetched"
    STALE_FALLBACK = "stale_fallback"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Result of ``TTLCache.fetch``.

    Attributes:
        outcome: How the result was produced
        entry: The entry served, or None when nothing could be served
        error: The transport error, for STALE_FALLBACK and FAILED
    """

    outcome: FetchOutcome
    entry: CacheEntry[T] | None = None
    error: TransportError | None = None

    @property
    def data(self) -> T | None:
        return self.entry.data if self.entry is not None else None

    @property
    def from_network(self) -> bool:
        return self.outcome is FetchOutcome.FETCHED


class TTLCache:
    """In-memory map of cache entries with a single freshness window.

    Example:
        ```python
        cache = TTLCache(ttl=30)
        result = await cache.fetch(REQUESTS, load_requests)
        if result.entry is not None:
            show(result.data)
        ```
    """

    def __init__(
        self,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
        name: str = "cache",
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Freshness window in seconds. Defaults to settings.cache_ttl.
            clock: Returns the current time in seconds.
            name: Label used in log events.
        """
        self._ttl = ttl if ttl is not None else settings.cache_ttl
        if self._ttl <= 0:
            raise ValueError("TTL must be greater than 0")
        self._clock = clock
        self._name = name
        self._entries: dict[str, CacheEntry[Any]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def name(self) -> str:
        return self._name

    def now(self) -> float:
        return self._clock()

    def get(self, key: CacheKey[T]) -> CacheEntry[T] | None:
        """Return the entry stored under ``key``, fresh or stale."""
        return self._entries.get(key.name)

    def put(self, key: CacheKey[T], data: T) -> CacheEntry[T]:
        """Store ``data`` under ``key`` stamped with the current time."""
        entry = CacheEntry(key=key.name, data=data, timestamp=self._clock())
        self._entries[key.name] = entry
        return entry

    def is_fresh(self, entry: CacheEntry[Any]) -> bool:
        return entry.age(self._clock()) < self._ttl

    async def fetch(
        self,
        key: CacheKey[T],
        loader: Callable[[], Awaitable[T]],
    ) -> FetchResult[T]:
        """Serve ``key`` from cache if fresh, otherwise reload it.

        Transport failures are never raised: they degrade to the stale
        entry if one exists, or to an empty FAILED result. Concurrent
        reloads of the same key are not coalesced; whichever resolves
        last is the entry that stays.

        Args:
            key: The cache slot
            loader: Coroutine factory performing the network call

        Returns:
            FetchResult describing what was served
        """
        cached = self.get(key)
        if cached is not None and self.is_fresh(cached):
            logger.debug("cache_hit", cache=self._name, key=key.name)
            return FetchResult(FetchOutcome.HIT, cached)

        logger.debug("cache_fetch", cache=self._name, key=key.name, stale=cached is not None)
        try:
            data = await loader()
        except TransportError as e:
            # Re-read: another fetch may have landed while we were suspended
            fallback = self.get(key)
            if fallback is not None:
                logger.warning(
                    "cache_stale_fallback",
                    cache=self._name,
                    key=key.name,
                    error=str(e),
                )
                return FetchResult(FetchOutcome.STALE_FALLBACK, fallback, e)

            logger.warning("cache_fetch_failed", cache=self._name, key=key.name, error=str(e))
            return FetchResult(FetchOutcome.FAILED, None, e)

        return FetchResult(FetchOutcome.FETCHED, self.put(key, data))

    def invalidate(self, keys: Iterable[CacheKey[Any] | str] | None = None) -> list[str]:
        """Evict entries without fetching.

        Args:
            keys: Keys (or key names) to drop. None drops everything.

        Returns:
            Names of the entries actually removed
        """
        if keys is None:
            removed = list(self._entries)
            self._entries.clear()
        else:
            removed = []
            for key in keys:
                name = key.name if isinstance(key, CacheKey) else key
                if self._entries.pop(name, None) is not None:
                    removed.append(name)

        if removed:
            logger.debug("cache_invalidated", cache=self._name, keys=removed)
        return removed

    def get_cache_info(self) -> dict[str, CacheInfo]:
        """Age (whole seconds) and freshness of every live entry."""
        now = self._clock()
        info = {}
        for name, entry in self._entries.items():
            age = entry.age(now)
            # Halves round up
            info[name] = CacheInfo(age=max(0, math.floor(age + 0.5)), fresh=age < self._ttl)
        return info

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        name = key.name if isinstance(key, CacheKey) else key
        return name in self._entries
