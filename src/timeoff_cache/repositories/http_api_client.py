"""HTTP implementation of ApiClient.

Talks to the time-off backend's REST API with a bearer token. Every
failure (connection, non-2xx, bad JSON) is raised as ``TransportError``
so the stores can handle them uniformly.

Endpoints used:
- GET    /requests
- POST   /requests
- PATCH  /requests/{id}/status
- DELETE /requests/{id}
- GET    /notifications
- GET    /notifications/unread-count
- PATCH  /notifications/{id}/read
- PATCH  /notifications/read-all
"""

from typing import Any

import httpx

from timeoff_cache.config import settings
from timeoff_cache.exceptions import AuthorizationError, TransportError


class HttpApiClient:
    """httpx-based implementation of the ApiClient protocol.

    This class satisfies the ApiClient protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = HttpApiClient.create(token="eyJhbGciOi...")
        requests = await client.get_requests()
        await client.close()
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP API client.

        Args:
            base_url: API root, e.g. ``https://host/api``. Defaults to settings.
            token: Bearer token. Defaults to settings.api_token.
            timeout: Request timeout in seconds. Defaults to settings.
            transport: Optional httpx transport (used by tests).
        """
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token = token if token is not None else settings.api_token
        self._timeout = timeout or settings.api_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        token: str | None = None,
    ) -> "HttpApiClient":
        """Factory method to create HttpApiClient with defaults.

        Args:
            base_url: API root. If None, uses settings.
            token: Bearer token. If None, uses settings.

        Returns:
            Configured HttpApiClient
        """
        return cls(base_url=base_url, token=token)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    def set_token(self, token: str) -> None:
        """Use a new bearer token for subsequent calls."""
        self._token = token

    def clear_token(self) -> None:
        """Drop the bearer token (logout)."""
        self._token = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one API call and decode its JSON body.

        Raises:
            AuthorizationError: On HTTP 401/403
            TransportError: On any other failure
        """
        url = f"{self._base_url}{endpoint}"

        try:
            response = await self.client.request(method, url, json=json, headers=self._headers())
        except httpx.ConnectError as e:
            raise TransportError("Cannot connect to server. Please check your connection.") from e
        except httpx.HTTPError as e:
            raise TransportError(f"API request failed: {e}") from e

        if response.is_error:
            message = f"HTTP error! status: {response.status_code}"
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("message"):
                    message = body["message"]
            except ValueError:
                pass

            error_cls = AuthorizationError if response.status_code in (401, 403) else TransportError
            raise error_cls(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {endpoint}", status_code=response.status_code) from e

    async def get_requests(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/requests")

    async def create_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/requests", json=payload)

    async def update_request_status(
        self,
        request_id: str,
        status: str,
        rejection_reason: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"status": status}
        if rejection_reason is not None:
            body["rejectionReason"] = rejection_reason
        return await self._request("PATCH", f"/requests/{request_id}/status", json=body)

    async def delete_request(self, request_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/requests/{request_id}")

    async def get_notifications(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/notifications")

    async def get_unread_count(self) -> dict[str, Any]:
        return await self._request("GET", "/notifications/unread-count")

    async def mark_notification_as_read(self, notification_id: str) -> dict[str, Any]:
        return await self._request("PATCH", f"/notifications/{notification_id}/read")

    async def mark_all_notifications_as_read(self) -> dict[str, Any]:
        return await self._request("PATCH", "/notifications/read-all")

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
