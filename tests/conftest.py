"""Shared fixtures: a controllable clock and an in-memory API."""

import asyncio
from collections import Counter
from typing import Any

import pytest

from timeoff_cache.exceptions import TransportError
from timeoff_cache.services import NotificationStore, RequestStore


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_notification(id: int, read: bool = False, message: str | None = None) -> dict[str, Any]:
    return {
        "id": id,
        "type": "request_approved",
        "message": message or f"Notification {id}",
        "read": int(read),  # SQLite booleans
        "createdAt": "2025-01-06 09:30:00",
    }


def make_request(id: str, status: str = "pending", department: str = "Operations") -> dict[str, Any]:
    return {
        "id": id,
        "employee": {
            "id": "u1",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "department": department,
            "role": "employee",
            "avatar": None,
        },
        "startDate": "2025-02-03",
        "endDate": "2025-02-04",
        "type": "paid time off",
        "reason": "Family trip",
        "status": status,
        "createdAt": "2025-01-20T10:00:00Z",
        "updatedAt": "2025-01-20T10:00:00Z",
        "approvedBy": None,
        "rejectionReason": None,
        "originalClockIn": None,
        "originalClockOut": None,
        "requestedClockIn": None,
        "requestedClockOut": None,
    }


class FakeApiClient:
    """In-memory ApiClient with call counting and failure injection.

    ``fail`` holds method names that raise TransportError. ``gates`` maps
    a method name to an asyncio.Event the call waits on before answering.
    """

    def __init__(
        self,
        requests: list[dict[str, Any]] | None = None,
        notifications: list[dict[str, Any]] | None = None,
    ) -> None:
        self.requests = list(requests or [])
        self.notifications = list(notifications or [])
        self.calls: Counter[str] = Counter()
        self.fail: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}
        self.created: list[dict[str, Any]] = []

    async def _call(self, name: str) -> None:
        self.calls[name] += 1
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if name in self.fail:
            raise TransportError(f"{name} failed", status_code=500)

    async def get_requests(self) -> list[dict[str, Any]]:
        await self._call("get_requests")
        return [dict(r) for r in self.requests]

    async def create_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        await self._call("create_request")
        self.created.append(payload)
        new = make_request(f"r{len(self.requests) + 1}")
        new.update(payload)
        self.requests.insert(0, new)
        return {"message": "Request created successfully", "id": new["id"]}

    async def update_request_status(
        self,
        request_id: str,
        status: str,
        rejection_reason: str | None = None,
    ) -> dict[str, Any]:
        await self._call("update_request_status")
        for r in self.requests:
            if r["id"] == request_id:
                r["status"] = status
                r["rejectionReason"] = rejection_reason
        return {"message": "Request updated successfully"}

    async def delete_request(self, request_id: str) -> dict[str, Any]:
        await self._call("delete_request")
        self.requests = [r for r in self.requests if r["id"] != request_id]
        return {"message": "Request deleted successfully"}

    async def get_notifications(self) -> list[dict[str, Any]]:
        await self._call("get_notifications")
        return [dict(n) for n in self.notifications]

    async def get_unread_count(self) -> dict[str, Any]:
        await self._call("get_unread_count")
        return {"count": sum(1 for n in self.notifications if not n["read"])}

    async def mark_notification_as_read(self, notification_id: str) -> dict[str, Any]:
        await self._call("mark_notification_as_read")
        for n in self.notifications:
            if str(n["id"]) == notification_id:
                n["read"] = 1
        return {"message": "Notification marked as read"}

    async def mark_all_notifications_as_read(self) -> dict[str, Any]:
        await self._call("mark_all_notifications_as_read")
        for n in self.notifications:
            n["read"] = 1
        return {"message": "All notifications marked as read"}


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def api():
    return FakeApiClient(
        requests=[make_request("r2"), make_request("r1", status="approved")],
        notifications=[
            make_notification(3),
            make_notification(2),
            make_notification(1, read=True),
        ],
    )


@pytest.fixture
def request_store(api, clock):
    return RequestStore(api, ttl=30, clock=clock)


@pytest.fixture
def notification_store(api, clock):
    return NotificationStore(api, ttl=30, poll_interval=30, clock=clock)
