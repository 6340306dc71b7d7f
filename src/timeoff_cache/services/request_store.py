"""Cache-backed store for time-off requests."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

import structlog
from pydantic import ValidationError

from timeoff_cache.dto import NewRequest, parse_requests
from timeoff_cache.entities import REQUESTS, TimeOffRequest
from timeoff_cache.entities.request import RequestStatus
from timeoff_cache.exceptions import TransportError
from timeoff_cache.protocols import ApiClient

from .base_store import BaseStore
from .ttl_cache import FetchOutcome

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RequestState:
    """Observable snapshot of the request store."""

    requests: tuple[TimeOffRequest, ...] = ()
    is_loading: bool = False
    error: str | None = None


class RequestStore(BaseStore[RequestState]):
    """Time-off requests with a 30 second cache in front of the API.

    Example:
        ```python
        store = RequestStore.create(api=HttpApiClient.create())

        requests = await store.fetch_requests()   # network
        requests = await store.fetch_requests()   # cached

        task = store.update_request_status("42", "approved")
        await task  # False if the server refused and the store resynced
        ```
    """

    def __init__(
        self,
        api: ApiClient,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(api, RequestState(), ttl=ttl, clock=clock, name="requests")

    @classmethod
    def create(cls, api: ApiClient, ttl: float | None = None) -> "RequestStore":
        """Factory method to create RequestStore with defaults.

        Args:
            api: Remote API client (required).
            ttl: Cache freshness window in seconds. If None, uses settings.
        """
        return cls(api=api, ttl=ttl)

    async def _load_requests(self) -> tuple[TimeOffRequest, ...]:
        raw = await self._api.get_requests()
        try:
            return parse_requests(raw)
        except ValidationError as e:
            raise TransportError(f"Malformed requests payload: {e.error_count()} errors") from e

    async def fetch_requests(self) -> tuple[TimeOffRequest, ...]:
        """Return requests from cache if fresh, otherwise from the API.

        Never raises on transport failure: the stale list (or the
        current, possibly empty, list) is returned and ``state.error``
        is set.
        """
        result = await self._cached_fetch(REQUESTS, self._load_requests)

        if result.outcome is FetchOutcome.HIT:
            return result.entry.data

        if result.outcome is FetchOutcome.FETCHED:
            self._set_state(requests=result.entry.data, is_loading=False, error=None)
            return result.entry.data

        if result.outcome is FetchOutcome.STALE_FALLBACK:
            self._set_state(requests=result.entry.data, is_loading=False, error="Failed to fetch requests")
            return result.entry.data

        self._set_state(is_loading=False, error="Failed to fetch requests")
        return self._state.requests

    async def fetch(self) -> tuple[TimeOffRequest, ...]:
        return await self.fetch_requests()

    async def force_refresh(self) -> tuple[TimeOffRequest, ...]:
        """Drop every cached entry and reload from the API."""
        logger.info("force_refresh", store=self._name)
        self._cache.invalidate()
        return await self.fetch_requests()

    async def add_request(self, request: NewRequest) -> tuple[TimeOffRequest, ...]:
        """Submit a new request, then reload the list.

        Raises:
            TransportError: If the server rejected the submission
        """
        self._set_state(is_loading=True, error=None)
        try:
            await self._api.create_request(request.to_api())
        except TransportError as e:
            logger.warning("create_request_failed", store=self._name, error=str(e))
            self._set_state(is_loading=False, error="Failed to create request")
            raise

        return await self.force_refresh()

    def update_request_status(
        self,
        request_id: str,
        status: RequestStatus,
        rejection_reason: str | None = None,
    ) -> "asyncio.Task[bool]":
        """Approve or reject a request optimistically."""

        def mutation(state: RequestState) -> RequestState:
            requests = tuple(
                replace(r, status=status, rejection_reason=rejection_reason) if r.id == request_id else r
                for r in state.requests
            )
            return replace(state, requests=requests)

        return self.optimistic_mutate(
            mutation,
            lambda: self._api.update_request_status(request_id, status, rejection_reason),
            invalidates=(REQUESTS,),
            operation="update_request_status",
        )

    def delete_request(self, request_id: str) -> "asyncio.Task[bool]":
        """Remove a request optimistically."""

        def mutation(state: RequestState) -> RequestState:
            return replace(state, requests=tuple(r for r in state.requests if r.id != request_id))

        return self.optimistic_mutate(
            mutation,
            lambda: self._api.delete_request(request_id),
            invalidates=(REQUESTS,),
            operation="delete_request",
        )
