"""Notification domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Notification:
    """A user notification.

    Attributes:
        id: Notification identifier
        type: Category (e.g. "request_approved")
        message: Human-readable text
        read: Whether the user has seen it
        created_at: When it was created
    """

    id: str
    type: str
    message: str
    read: bool = False
    created_at: datetime | None = None
