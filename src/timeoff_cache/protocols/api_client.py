"""Remote API client protocol.

Defines the calls the stores make against the time-off backend. Bodies
are raw decoded JSON; the stores convert them through DTOs.

Implementations can include:
- HttpApiClient over httpx (default)
- In-memory fakes for tests and demos
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ApiClient(Protocol):
    """Protocol for the time-off request backend.

    Every method may raise ``TransportError`` (or its subclass
    ``AuthorizationError``). The stores treat all of them uniformly.
    """

    async def get_requests(self) -> list[dict[str, Any]]:
        """Fetch requests visible to the current user.

        Returns:
            Raw request objects, role-filtered and ordered by the server
        """
        ...

    async def create_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Submit a new request.

        Args:
            payload: camelCase request body

        Returns:
            Server acknowledgement
        """
        ...

    async def update_request_status(
        self,
        request_id: str,
        status: str,
        rejection_reason: str | None = None,
    ) -> dict[str, Any]:
        """Approve or reject a request."""
        ...

    async def delete_request(self, request_id: str) -> dict[str, Any]:
        """Delete a request."""
        ...

    async def get_notifications(self) -> list[dict[str, Any]]:
        """Fetch the current user's notifications, newest first."""
        ...

    async def get_unread_count(self) -> dict[str, Any]:
        """Fetch the unread notification count.

        Returns:
            ``{"count": <int>}``
        """
        ...

    async def mark_notification_as_read(self, notification_id: str) -> dict[str, Any]:
        """Mark one notification as read."""
        ...

    async def mark_all_notifications_as_read(self) -> dict[str, Any]:
        """Mark every notification of the current user as read."""
        ...
