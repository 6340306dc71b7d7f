"""Payload DTOs for the remote API.

The backend speaks camelCase JSON and stores booleans as SQLite integers;
these models absorb both and convert to frozen domain entities.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from timeoff_cache.entities import Employee, Notification, TimeOffRequest
from timeoff_cache.entities.request import RequestStatus, RequestType, UserRole


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class EmployeePayload(_ApiModel):
    """Employee summary embedded in a request."""

    id: str | int | None = None
    name: str = ""
    email: str | None = None
    department: str | None = None
    role: UserRole | None = None
    avatar: str | None = None

    def to_entity(self) -> Employee:
        return Employee(
            id=str(self.id) if self.id is not None else None,
            name=self.name,
            email=self.email,
            department=self.department,
            role=self.role,
            avatar=self.avatar,
        )


class RequestPayload(_ApiModel):
    """A time-off request as served by ``GET /requests``."""

    id: str | int
    employee: EmployeePayload
    start_date: date
    end_date: date
    type: RequestType
    reason: str = ""
    status: RequestStatus = "pending"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    approved_by: EmployeePayload | None = None
    rejection_reason: str | None = None
    original_clock_in: str | None = None
    original_clock_out: str | None = None
    requested_clock_in: str | None = None
    requested_clock_out: str | None = None

    def to_entity(self) -> TimeOffRequest:
        return TimeOffRequest(
            id=str(self.id),
            employee=self.employee.to_entity(),
            start_date=self.start_date,
            end_date=self.end_date,
            type=self.type,
            reason=self.reason,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
            approved_by=self.approved_by.to_entity() if self.approved_by else None,
            rejection_reason=self.rejection_reason,
            original_clock_in=self.original_clock_in,
            original_clock_out=self.original_clock_out,
            requested_clock_in=self.requested_clock_in,
            requested_clock_out=self.requested_clock_out,
        )


class NotificationPayload(_ApiModel):
    """A notification as served by ``GET /notifications``."""

    id: str | int
    type: str = "info"
    message: str = ""
    read: bool = False
    created_at: datetime | None = None

    def to_entity(self) -> Notification:
        return Notification(
            id=str(self.id),
            type=self.type,
            message=self.message,
            read=self.read,
            created_at=self.created_at,
        )


class UnreadCountPayload(_ApiModel):
    """Body of ``GET /notifications/unread-count``."""

    count: int = Field(..., ge=0)


class NewRequest(_ApiModel):
    """Body of ``POST /requests``."""

    start_date: date
    end_date: date
    type: RequestType
    reason: str = Field(..., min_length=1)
    original_clock_in: str | None = None
    original_clock_out: str | None = None
    requested_clock_in: str | None = None
    requested_clock_out: str | None = None

    def to_api(self) -> dict:
        """Serialize to the camelCase JSON body the backend expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_requests(raw: list[dict]) -> tuple[TimeOffRequest, ...]:
    """Convert a raw ``GET /requests`` body, keeping server order."""
    return tuple(RequestPayload.model_validate(item).to_entity() for item in raw)


def parse_notifications(raw: list[dict]) -> tuple[Notification, ...]:
    """Convert a raw ``GET /notifications`` body, keeping server order."""
    return tuple(NotificationPayload.model_validate(item).to_entity() for item in raw)
