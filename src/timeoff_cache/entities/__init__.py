"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by stores and the
cache. They are NOT used for API contracts - use DTOs from the dto
package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
"""

from .cache_entry import CacheEntry, CacheInfo, CacheKey
from .notification import Notification
from .request import Employee, RequestStatus, RequestType, TimeOffRequest, UserRole

# Well-known cache slots
REQUESTS: CacheKey[tuple[TimeOffRequest, ...]] = CacheKey("requests")
NOTIFICATIONS: CacheKey[tuple[Notification, ...]] = CacheKey("notifications")
UNREAD_COUNT: CacheKey[int] = CacheKey("unreadCount")

__all__ = [
    "CacheEntry",
    "CacheInfo",
    "CacheKey",
    "Employee",
    "Notification",
    "RequestStatus",
    "RequestType",
    "TimeOffRequest",
    "UserRole",
    "REQUESTS",
    "NOTIFICATIONS",
    "UNREAD_COUNT",
]
