"""Response DTOs for the debug API endpoints."""

from pydantic import BaseModel, Field


class CacheInfoItem(BaseModel):
    """Age and freshness of a single cache entry."""

    age: int = Field(..., description="Entry age in whole seconds", ge=0)
    fresh: bool = Field(..., description="Whether the entry is younger than the TTL")


class StoreCacheInfo(BaseModel):
    """Cache entries held by one store."""

    size: int = Field(..., description="Number of live entries", ge=0)
    ttl_seconds: float = Field(..., description="Freshness window for entries", gt=0)
    entries: dict[str, CacheInfoItem] = Field(
        default_factory=dict,
        description="Entry info keyed by cache key",
    )


class CacheDebugResponse(BaseModel):
    """Response DTO for GET /debug/cache."""

    requests: StoreCacheInfo
    notifications: StoreCacheInfo
    request_count: int = Field(..., description="Requests currently held in state", ge=0)
    notification_count: int = Field(..., description="Notifications currently held in state", ge=0)
    unread_count: int = Field(..., description="Current unread notification count", ge=0)
    polling: bool = Field(..., description="Whether the unread-count poller is running")


class CacheRefreshResponse(BaseModel):
    """Response DTO for POST /debug/cache/refresh."""

    success: bool = Field(..., description="Whether both stores hold data without errors")
    request_count: int = Field(..., ge=0)
    notification_count: int = Field(..., ge=0)
    unread_count: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list, description="Store errors after refresh")


class CacheInvalidateResponse(BaseModel):
    """Response DTO for cache invalidation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    invalidated: list[str] = Field(default_factory=list, description="Keys that were removed")
    message: str = Field(..., description="Human-readable status message")
