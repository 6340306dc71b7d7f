"""Cache entry domain entities."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheKey(Generic[T]):
    """Typed name of a cache slot.

    The type parameter records the payload stored under the key, so
    ``TTLCache.get(NOTIFICATIONS)`` is known to hold notifications and
    ``TTLCache.get(UNREAD_COUNT)`` an ``int``.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A single timestamped payload.

    Attributes:
        key: Name of the slot this entry lives in
        data: The cached payload (treated as opaque)
        timestamp: Clock value (seconds) at which the payload was fetched
    """

    key: str
    data: T
    timestamp: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the payload was fetched."""
        return now - self.timestamp


@dataclass(frozen=True)
class CacheInfo:
    """Debug view of one live entry."""

    age: int
    fresh: bool
