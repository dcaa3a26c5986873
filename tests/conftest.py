from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.attendance.service import AttendanceService
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus, RequestStatus, Role
from src.hr_attendance.hr_attendance.core.exceptions import UnresolvedLeaveTypeError
from src.hr_attendance.hr_attendance.employees.model import Employee
from src.hr_attendance.hr_attendance.late_policy.model import LateDeductionLog
from src.hr_attendance.hr_attendance.late_policy.service import LatePolicyService
from src.hr_attendance.hr_attendance.leave.model import LeaveBalance, LeaveRequest
from src.hr_attendance.hr_attendance.settings.model import Settings

CASUAL = "casual-leave"


def make_employee(employee_id: str = "e1", *, week_off_day: Optional[int] = 0, role: Role = Role.EMPLOYEE, is_active: bool = True) -> Employee:
    return Employee(
        employee_id=employee_id,
        email=f"{employee_id}@example.com",
        first_name="Asha",
        last_name=employee_id.upper(),
        role=role,
        week_off_day=week_off_day,
        is_active=is_active,
    )


def make_settings(**overrides) -> Settings:
    values = dict(
        settings_id="s1",
        max_clocking_time=time(11, 0),
        auto_clock_out_time=time(19, 30),
        max_late_days=3,
        late_policy_deduction_per_day=Decimal("0.5"),
        late_policy_leave_type_id=CASUAL,
        company_name="Acme",
    )
    values.update(overrides)
    return Settings(**values)


def make_leave(employee_id: str, start: date, end: Optional[date] = None, **kw) -> LeaveRequest:
    return LeaveRequest(
        request_id=kw.pop("request_id", 1),
        employee_id=employee_id,
        leave_type_id=kw.pop("leave_type_id", CASUAL),
        start_date=start,
        end_date=end or start,
        status=kw.pop("status", RequestStatus.APPROVED),
        **kw,
    )


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self.by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def list_active(self):
        return [e for e in self.by_id.values() if e.is_active]


class InMemorySettings:
    def __init__(self, settings: Optional[Settings]):
        self.settings = settings

    def get(self) -> Optional[Settings]:
        return self.settings


class InMemoryLeaves:
    def __init__(self):
        self.requests: list[LeaveRequest] = []
        self.balances: dict[tuple[str, str, int], LeaveBalance] = {}

    def add_balance(self, employee_id: str, leave_type_id: str = CASUAL, year: int = 2026, total: str = "12", used: str = "0"):
        self.balances[(employee_id, leave_type_id, year)] = LeaveBalance(
            balance_id=len(self.balances) + 1,
            employee_id=employee_id,
            leave_type_id=leave_type_id,
            year=year,
            total_days=Decimal(total),
            used_days=Decimal(used),
        )

    def list_approved_overlapping(self, *, employee_id, start_date, end_date):
        return [
            r
            for r in self.requests
            if r.employee_id == employee_id
            and r.status == RequestStatus.APPROVED
            and r.start_date <= end_date
            and r.end_date >= start_date
        ]

    def get_balance(self, *, employee_id, leave_type_id, year):
        return self.balances.get((employee_id, leave_type_id, int(year)))

    def increment_used(self, *, employee_id, leave_type_id, year, delta: Decimal) -> bool:
        key = (employee_id, leave_type_id, int(year))
        balance = self.balances.get(key)
        if balance is None:
            return False
        self.balances[key] = replace(balance, used_days=balance.used_days + delta)
        return True


class InMemoryAttendance:
    def __init__(self):
        self.by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, employee_id: str, clock_in: Optional[datetime], *, work_date: Optional[date] = None, clock_out=None, status=AttendanceStatus.PRESENT):
        self._id += 1
        work_date = work_date or clock_in.date()
        rec = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            status=status,
        )
        self.by_key[(employee_id, work_date)] = rec
        return rec

    def get_for_employee_and_date(self, employee_id, work_date):
        return self.by_key.get((employee_id, work_date))

    def list_for_employee_between(self, employee_id, start_date, end_date):
        return [r for (eid, d), r in self.by_key.items() if eid == employee_id and start_date <= d <= end_date]

    def list_open_for_date(self, work_date):
        return [r for r in self.by_key.values() if r.work_date == work_date and r.is_open]

    def create_clock_in(self, *, employee_id, work_date, clock_in, status, notes=None) -> int:
        rec = self.add(employee_id, clock_in, work_date=work_date, status=status)
        self.by_key[(employee_id, work_date)] = replace(rec, notes=notes)
        return rec.attendance_id

    def update_clock_out(self, *, attendance_id, clock_out, total_hours) -> bool:
        for key, rec in self.by_key.items():
            if rec.attendance_id == attendance_id and rec.clock_out is None:
                self.by_key[key] = replace(rec, clock_out=clock_out, total_hours=total_hours)
                return True
        return False

    def upsert_status(self, *, employee_id, work_date, status, notes=None) -> int:
        rec = self.by_key.get((employee_id, work_date))
        if rec is None:
            self.add(employee_id, None, work_date=work_date, status=status)
            rec = self.by_key[(employee_id, work_date)]
        self.by_key[(employee_id, work_date)] = replace(rec, status=status, notes=notes or rec.notes)
        return 1


class InMemoryLateLogs:
    """Compare-and-set semantics of the MySQL repository, over InMemoryLeaves balances."""

    def __init__(self, leaves: InMemoryLeaves):
        self.leaves = leaves
        self.logs: dict[tuple[str, int, int], LateDeductionLog] = {}
        self.apply_calls = 0

    def get_log(self, *, employee_id, year, month):
        return self.logs.get((employee_id, int(year), int(month)))

    def _write(self, employee_id, year, month, leave_type_id, new_total, late_count):
        key = (employee_id, int(year), int(month))
        self.logs[key] = LateDeductionLog(
            log_id=len(self.logs) + 1,
            employee_id=employee_id,
            year=int(year),
            month=int(month),
            last_deducted_late_count=int(late_count),
            total_deducted=new_total,
            leave_type_id=leave_type_id,
        )

    def apply_deduction(self, *, employee_id, year, month, leave_type_id, expected_total, new_total, late_count) -> bool:
        self.apply_calls += 1
        current = self.get_log(employee_id=employee_id, year=year, month=month)
        current_total = current.total_deducted if current else Decimal("0")
        if current_total != expected_total:
            return False
        if self.leaves.get_balance(employee_id=employee_id, leave_type_id=leave_type_id, year=year) is None:
            raise UnresolvedLeaveTypeError(employee_id=employee_id, leave_type_id=leave_type_id, year=int(year))
        self._write(employee_id, year, month, leave_type_id, new_total, late_count)
        self.leaves.increment_used(
            employee_id=employee_id, leave_type_id=leave_type_id, year=year, delta=new_total - expected_total
        )
        return True


@pytest.fixture
def employee():
    return make_employee("e1", week_off_day=0)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def employees(employee):
    return InMemoryEmployees(employee)


@pytest.fixture
def settings_repo(settings):
    return InMemorySettings(settings)


@pytest.fixture
def leaves():
    return InMemoryLeaves()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def late_logs(leaves):
    return InMemoryLateLogs(leaves)


@pytest.fixture
def attendance_service(attendance_repo, employees, leaves, settings_repo):
    return AttendanceService(attendance_repo, employees, leaves, settings_repo)


@pytest.fixture
def late_policy_service(late_logs, leaves, settings_repo, employees, attendance_service):
    return LatePolicyService(late_logs, leaves, settings_repo, employees, attendance_service)
