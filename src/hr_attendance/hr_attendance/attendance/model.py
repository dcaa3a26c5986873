from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import sunday_based_weekday
from ..core.enums import AttendanceStatus, RequestStatus
from ..employees.model import Employee
from ..leave.model import LeaveRequest
from ..settings.model import Settings


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, work_date)."""

    attendance_id: int
    employee_id: str
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[Decimal] = None
    notes: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None


@dataclass(frozen=True)
class DayContext:
    """Everything the classifier looks at for one employee and one calendar day.

    `today` is the evaluation day; it is passed in rather than read from the clock.
    `leaves` may hold any requests of the employee; only approved ones covering
    `work_date` count.
    """

    employee: Employee
    work_date: date
    today: date
    settings: Optional[Settings]
    clock_in: Optional[datetime] = None
    leaves: Sequence[LeaveRequest] = field(default_factory=tuple)

    @property
    def is_week_off(self) -> bool:
        wod = self.employee.week_off_day
        return wod is not None and sunday_based_weekday(self.work_date) == wod

    @property
    def approved_leave(self) -> Optional[LeaveRequest]:
        for leave in self.leaves:
            if leave.status == RequestStatus.APPROVED and leave.covers(self.work_date):
                return leave
        return None

    @property
    def has_elapsed(self) -> bool:
        return self.work_date < self.today


@dataclass(frozen=True)
class DayClassification:
    work_date: date
    status: Optional[AttendanceStatus]
    note: Optional[str] = None
    config_incomplete: bool = False
    record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class MonthlyAttendance:
    """Read-model for one employee-month (days most recent first)."""

    employee_id: str
    year: int
    month: int
    days: tuple[DayClassification, ...]

    @property
    def config_incomplete(self) -> bool:
        return any(d.config_incomplete for d in self.days)

    @property
    def counts(self) -> dict[AttendanceStatus, int]:
        out = {s: 0 for s in AttendanceStatus}
        for d in self.days:
            if d.status is not None:
                out[d.status] += 1
        return out

    @property
    def late_count(self) -> int:
        return self.counts[AttendanceStatus.LATE]
