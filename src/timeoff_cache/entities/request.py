"""Time-off request domain entities."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

UserRole = Literal["employee", "manager", "admin"]
RequestStatus = Literal["pending", "approved", "rejected"]
RequestType = Literal["paid time off", "sick leave", "time edit", "other"]


@dataclass(frozen=True)
class Employee:
    """The employee a request belongs to (or the approver)."""

    id: str | None
    name: str
    email: str | None = None
    department: str | None = None
    role: UserRole | None = None
    avatar: str | None = None


@dataclass(frozen=True)
class TimeOffRequest:
    """A time-off or time-edit request as returned by the API.

    Requests arrive already filtered by role and sorted newest first
    by the server; the stores keep that order.

    Attributes:
        id: Request identifier
        employee: Who submitted the request
        start_date: First day covered
        end_date: Last day covered
        type: Kind of request
        reason: Free-text justification
        status: Approval state
        created_at: Submission time
        updated_at: Last modification time
        approved_by: Manager/admin who handled it, if any
        rejection_reason: Set when status is "rejected"
        original_clock_in: Time-edit only, recorded clock-in
        original_clock_out: Time-edit only, recorded clock-out
        requested_clock_in: Time-edit only, corrected clock-in
        requested_clock_out: Time-edit only, corrected clock-out
    """

    id: str
    employee: Employee
    start_date: date
    end_date: date
    type: RequestType
    reason: str
    status: RequestStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    approved_by: Employee | None = None
    rejection_reason: str | None = None
    original_clock_in: str | None = None
    original_clock_out: str | None = None
    requested_clock_in: str | None = None
    requested_clock_out: str | None = None
