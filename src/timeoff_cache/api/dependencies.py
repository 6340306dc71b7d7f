"""Dependency injection configuration for the debug API.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - StoreContext and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - The unread-count poller lives exactly as long as the app
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request

from timeoff_cache.config import settings
from timeoff_cache.handlers import CacheDebugHandler
from timeoff_cache.logging_config import configure_logging
from timeoff_cache.services import StoreContext

logger = structlog.get_logger(__name__)

ContextFactory = Callable[[], StoreContext]


def get_handler(request: Request) -> CacheDebugHandler:
    """Dependency injection for CacheDebugHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheDebugHandler not initialized. Check lifespan setup.")
    return handler


def build_lifespan(context_factory: ContextFactory = StoreContext.create):
    """Create a lifespan that owns one StoreContext.

    Args:
        context_factory: Builds the context (tests pass one with a fake client)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.log_json)
        context = context_factory()

        async with context:
            app.state.store_context = context
            app.state.cache_handler = CacheDebugHandler(context=context)
            logger.info("debug_api_started", ttl=context.requests.cache.ttl)

            yield

            del app.state.cache_handler
            del app.state.store_context

        logger.info("debug_api_stopped")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CacheDebugHandler, Depends(get_handler)]
