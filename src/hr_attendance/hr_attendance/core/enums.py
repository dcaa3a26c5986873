from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access checks."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Per-day attendance status as stored in the attendance table."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"
    WEEK_OFF = "week_off"


class RequestStatus(str, Enum):
    """Approval state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class HalfDayPeriod(str, Enum):
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"


class DeductionResult(str, Enum):
    """What one late-policy evaluation did to the month's deduction."""

    DISABLED = "disabled"
    APPLIED = "applied"
    UNCHANGED = "unchanged"
    COUNT_DECREASED = "count_decreased"
