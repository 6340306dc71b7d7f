"""
Tests for the httpx-backed API client.
"""

import json

import httpx
import pytest

from timeoff_cache.exceptions import AuthorizationError, TransportError
from timeoff_cache.repositories import HttpApiClient


def make_client(handler, token="secret-token"):
    return HttpApiClient(
        base_url="https://api.example.test/api/",
        token=token,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


async def test_sends_bearer_token_and_decodes_json():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[{"id": 1}])

    client = make_client(handler)
    body = await client.get_notifications()
    await client.close()

    assert body == [{"id": 1}]
    assert seen["url"] == "https://api.example.test/api/notifications"
    assert seen["auth"] == "Bearer secret-token"


async def test_omits_authorization_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"count": 0})

    client = make_client(handler, token="")
    await client.get_unread_count()
    await client.close()

    assert seen["auth"] is None


async def test_token_can_be_replaced_and_cleared():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[])

    client = make_client(handler)
    client.set_token("other")
    await client.get_requests()
    client.clear_token()
    await client.get_requests()
    await client.close()

    assert seen == ["Bearer other", None]
    assert not client.has_token


async def test_update_status_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": "Request updated successfully"})

    client = make_client(handler)
    await client.update_request_status("42", "rejected", "Short staffed")
    await client.close()

    assert seen == {
        "method": "PATCH",
        "path": "/api/requests/42/status",
        "body": {"status": "rejected", "rejectionReason": "Short staffed"},
    }


async def test_mark_endpoints():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append((request.method, request.url.path))
        return httpx.Response(200, json={"message": "ok"})

    client = make_client(handler)
    await client.mark_notification_as_read("7")
    await client.mark_all_notifications_as_read()
    await client.close()

    assert paths == [
        ("PATCH", "/api/notifications/7/read"),
        ("PATCH", "/api/notifications/read-all"),
    ]


async def test_server_message_becomes_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "Failed to fetch requests"})

    client = make_client(handler)
    with pytest.raises(TransportError) as exc_info:
        await client.get_requests()
    await client.close()

    assert exc_info.value.message == "Failed to fetch requests"
    assert exc_info.value.status_code == 500


async def test_status_only_error_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad gateway")

    client = make_client(handler)
    with pytest.raises(TransportError, match="HTTP error! status: 502"):
        await client.get_requests()
    await client.close()


async def test_unauthorized_raises_authorization_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Access token required"})

    client = make_client(handler)
    with pytest.raises(AuthorizationError):
        await client.get_notifications()
    await client.close()


async def test_connection_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(TransportError, match="Cannot connect to server"):
        await client.get_notifications()
    await client.close()
