"""FastAPI debug application for the request/notification caches."""

from typing import Any

from fastapi import FastAPI

from timeoff_cache.config import settings
from timeoff_cache.dto import CacheDebugResponse, CacheInvalidateResponse, CacheRefreshResponse
from timeoff_cache.services import StoreContext

from .dependencies import ContextFactory, HandlerDep, build_lifespan


def create_app(context_factory: ContextFactory = StoreContext.create) -> FastAPI:
    """Build the debug API.

    Args:
        context_factory: Builds the StoreContext used for the app's lifetime
    """
    app = FastAPI(
        title="Time-off Cache Debug API",
        description="Inspect and control the request and notification caches",
        version="0.1.0",
        lifespan=build_lifespan(context_factory),
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Time-off Cache Debug API",
            "version": "0.1.0",
            "endpoints": {
                "cache": "/debug/cache",
                "refresh": "/debug/cache/refresh",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    async def health(handler: HandlerDep) -> dict[str, Any]:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/debug/cache", response_model=CacheDebugResponse)
    async def cache_info(handler: HandlerDep) -> CacheDebugResponse:
        """Age and freshness of every cache entry in both stores."""
        return await handler.get_cache_info()

    @app.post("/debug/cache/refresh", response_model=CacheRefreshResponse)
    async def refresh_all(handler: HandlerDep) -> CacheRefreshResponse:
        """Force-refresh both stores."""
        return await handler.refresh_all()

    @app.delete("/debug/cache", response_model=CacheInvalidateResponse)
    async def clear_cache(handler: HandlerDep, store: str | None = None) -> CacheInvalidateResponse:
        """Invalidate every key, optionally in a single store."""
        return await handler.invalidate(store=store)

    @app.delete("/debug/cache/{key}", response_model=CacheInvalidateResponse)
    async def invalidate_key(key: str, handler: HandlerDep) -> CacheInvalidateResponse:
        """Invalidate one cache key in both stores."""
        return await handler.invalidate(key=key)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "timeoff_cache.api.app:app",
        host=settings.debug_api_host,
        port=settings.debug_api_port,
    )
