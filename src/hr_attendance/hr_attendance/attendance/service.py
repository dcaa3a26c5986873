from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import compute_total_hours, dates_in_month, month_bounds
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leave.repository import LeaveRepository
from ..settings.repository import SettingsRepository
from .classifier import AttendanceClassifier
from .model import DayClassification, DayContext, MonthlyAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.LEAVE: "On Leave",
    AttendanceStatus.WEEK_OFF: "Week Off",
}


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        leaves: LeaveRepository,
        settings: SettingsRepository,
        *,
        classifier: Optional[AttendanceClassifier] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leaves = leaves
        self._settings = settings
        self._classifier = classifier or AttendanceClassifier()

    def _get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise ValidationError(f"Employee {employee_id} does not exist")
        return employee

    def classify_day(self, employee_id: str, work_date: date, *, today: date) -> DayClassification:
        employee = self._get_employee(employee_id)
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        leaves = self._leaves.list_approved_overlapping(employee_id=employee_id, start_date=work_date, end_date=work_date)
        ctx = DayContext(
            employee=employee,
            work_date=work_date,
            today=today,
            settings=self._settings.get(),
            clock_in=record.clock_in if record else None,
            leaves=tuple(leaves),
        )
        result = self._classifier.classify(ctx, record=record)
        if result.config_incomplete:
            logger.warning("Late cutoff not configured; %s on %s counted as present", employee_id, work_date)
        return result

    def classify_month(self, employee_id: str, year: int, month: int, *, today: date) -> MonthlyAttendance:
        """Classify every elapsed-or-current day of the month, most recent first."""
        start, end = month_bounds(year, month)
        employee = self._get_employee(employee_id)
        settings = self._settings.get()

        records = {r.work_date: r for r in self._attendance.list_for_employee_between(employee_id, start, end)}
        leaves = tuple(self._leaves.list_approved_overlapping(employee_id=employee_id, start_date=start, end_date=end))

        days = []
        for day in dates_in_month(year, month):
            if day > today:
                break
            record = records.get(day)
            ctx = DayContext(
                employee=employee,
                work_date=day,
                today=today,
                settings=settings,
                clock_in=record.clock_in if record else None,
                leaves=leaves,
            )
            days.append(self._classifier.classify(ctx, record=record))

        days.reverse()
        monthly = MonthlyAttendance(employee_id=employee_id, year=start.year, month=start.month, days=tuple(days))
        if monthly.config_incomplete:
            logger.warning(
                "Late cutoff not configured; clocked-in days of %s in %04d-%02d counted as present",
                employee_id,
                start.year,
                start.month,
            )
        return monthly

    def clock_in(self, employee_id: str, *, now: datetime) -> DayClassification:
        employee = self._get_employee(employee_id)
        if not employee.is_active:
            raise ValidationError("Inactive employees cannot clock in")

        today = now.date()
        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise ValidationError("Already clocked in today")

        leaves = self._leaves.list_approved_overlapping(employee_id=employee_id, start_date=today, end_date=today)
        ctx = DayContext(
            employee=employee,
            work_date=today,
            today=today,
            settings=self._settings.get(),
            clock_in=now,
            leaves=tuple(leaves),
        )
        result = self._classifier.classify(ctx)
        if result.config_incomplete:
            logger.warning("Late cutoff not configured; clock-in of %s recorded as present", employee_id)

        self._attendance.create_clock_in(
            employee_id=employee_id,
            work_date=today,
            clock_in=now,
            status=result.status,
            notes=result.note,
        )
        logger.info("Clock-in %s at %s -> %s", employee_id, now.isoformat(), result.status.value)
        return result

    def clock_out(self, employee_id: str, *, now: datetime) -> None:
        record = self._attendance.get_for_employee_and_date(employee_id, now.date())
        if not record or record.clock_in is None:
            raise ValidationError("Not clocked in today")
        if record.clock_out is not None:
            raise ValidationError("Already clocked out today")

        total_hours = compute_total_hours(record.clock_in, now)
        if not self._attendance.update_clock_out(attendance_id=record.attendance_id, clock_out=now, total_hours=total_hours):
            raise ValidationError("Clock-out failed")

    def auto_clock_out(self, *, now: datetime) -> int:
        """Close today's open records at the configured auto clock-out time."""
        settings = self._settings.get()
        cutoff = settings.auto_clock_out_time if settings else None
        if cutoff is None:
            logger.warning("Auto clock-out time not configured; skipping")
            return 0
        if now.time() < cutoff:
            return 0

        closed = 0
        for record in self._attendance.list_open_for_date(now.date()):
            clock_out = max(datetime.combine(record.work_date, cutoff, tzinfo=record.clock_in.tzinfo), record.clock_in)
            total_hours = compute_total_hours(record.clock_in, clock_out)
            if self._attendance.update_clock_out(
                attendance_id=record.attendance_id, clock_out=clock_out, total_hours=total_hours
            ):
                closed += 1
        logger.info("Auto clock-out closed %d record(s) for %s", closed, now.date())
        return closed

    def mark_absences(self, work_date: date, *, today: date) -> int:
        """Write status rows for active employees who have no record on an elapsed day."""
        if work_date >= today:
            raise ValidationError("Only elapsed days can be marked")

        written = 0
        for employee in self._employees.list_active():
            if self._attendance.get_for_employee_and_date(employee.employee_id, work_date):
                continue
            result = self.classify_day(employee.employee_id, work_date, today=today)
            if result.status is None:
                continue
            self._attendance.upsert_status(
                employee_id=employee.employee_id,
                work_date=work_date,
                status=result.status,
                notes=result.note,
            )
            written += 1
        logger.info("Marked %d status row(s) for %s", written, work_date)
        return written

    def reclassify_day(self, employee_id: str, work_date: date, *, today: date) -> DayClassification:
        """Recompute a day (e.g. after a backdated leave approval) and store the status if it changed."""
        result = self.classify_day(employee_id, work_date, today=today)
        if result.status is None:
            return result
        if result.record is None or result.record.status != result.status:
            self._attendance.upsert_status(
                employee_id=employee_id,
                work_date=work_date,
                status=result.status,
                notes=result.note,
            )
        return result

    def history_rows(self, employee_id: str, year: int, month: int, *, today: date) -> dict:
        monthly = self.classify_month(employee_id, year, month, today=today)
        employee = self._get_employee(employee_id)
        return {
            "employee_id": monthly.employee_id,
            "employee_name": employee.full_name,
            "month": f"{monthly.year:04d}-{monthly.month:02d}",
            "config_incomplete": monthly.config_incomplete,
            "counts": {status.value: n for status, n in monthly.counts.items()},
            "days": [self._to_ui(d) for d in monthly.days],
        }

    @staticmethod
    def _to_ui(d: DayClassification) -> dict:
        r = d.record
        return {
            "date": d.work_date.strftime("%Y-%m-%d"),
            "status": d.status.value if d.status else None,
            "label": STATUS_LABELS.get(d.status, "Pending"),
            "clock_in": r.clock_in.strftime("%H:%M") if r and r.clock_in else "-",
            "clock_out": r.clock_out.strftime("%H:%M") if r and r.clock_out else "-",
            "total_hours": f"{r.total_hours}h" if r and r.total_hours is not None else "-",
            "note": d.note or "",
        }
