"""Data Transfer Objects for API contracts.

These Pydantic models define the external contracts: the remote API's
payloads and the debug API's responses.

Internal logic should use entities from the entities package.
"""

from .payloads import (
    EmployeePayload,
    NewRequest,
    NotificationPayload,
    RequestPayload,
    UnreadCountPayload,
    parse_notifications,
    parse_requests,
)
from .responses import (
    CacheDebugResponse,
    CacheInfoItem,
    CacheInvalidateResponse,
    CacheRefreshResponse,
    StoreCacheInfo,
)

__all__ = [
    "EmployeePayload",
    "RequestPayload",
    "NotificationPayload",
    "UnreadCountPayload",
    "NewRequest",
    "parse_requests",
    "parse_notifications",
    "CacheInfoItem",
    "StoreCacheInfo",
    "CacheDebugResponse",
    "CacheRefreshResponse",
    "CacheInvalidateResponse",
]
