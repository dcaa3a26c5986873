from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee_between(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_open_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        """Records with a clock-in and no clock-out."""

        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        employee_id: str,
        work_date: date,
        clock_in: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_clock_out(self, *, attendance_id: int, clock_out: datetime, total_hours: Optional[Decimal]) -> bool:
        raise NotImplementedError

    def upsert_status(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        """Insert a status-only row or update the status of the existing (employee, date) row."""

        raise NotImplementedError
