from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus
from src.hr_attendance.hr_attendance.core.exceptions import InvalidDateError, ValidationError

from conftest import make_employee, make_leave, make_settings


def test_clock_in_after_cutoff_is_stored_late(attendance_service, attendance_repo):
    now = datetime(2026, 2, 3, 11, 1)
    result = attendance_service.clock_in("e1", now=now)

    rec = attendance_repo.get_for_employee_and_date("e1", now.date())
    assert result.status == AttendanceStatus.LATE
    assert rec.status == AttendanceStatus.LATE
    assert rec.clock_in == now


def test_clock_in_twice_same_day_fails(attendance_service):
    attendance_service.clock_in("e1", now=datetime(2026, 2, 3, 9, 0))
    with pytest.raises(ValidationError):
        attendance_service.clock_in("e1", now=datetime(2026, 2, 3, 9, 5))


def test_clock_in_unknown_or_inactive_employee(attendance_service, employees):
    with pytest.raises(ValidationError):
        attendance_service.clock_in("nobody", now=datetime(2026, 2, 3, 9, 0))

    employees.by_id["e2"] = make_employee("e2", is_active=False)
    with pytest.raises(ValidationError):
        attendance_service.clock_in("e2", now=datetime(2026, 2, 3, 9, 0))


def test_clock_out_stores_total_hours(attendance_service, attendance_repo):
    attendance_service.clock_in("e1", now=datetime(2026, 2, 3, 9, 0))
    attendance_service.clock_out("e1", now=datetime(2026, 2, 3, 17, 30))

    rec = attendance_repo.get_for_employee_and_date("e1", date(2026, 2, 3))
    assert rec.clock_out == datetime(2026, 2, 3, 17, 30)
    assert rec.total_hours == Decimal("8.5")


def test_clock_out_requires_open_record(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.clock_out("e1", now=datetime(2026, 2, 3, 17, 0))

    attendance_service.clock_in("e1", now=datetime(2026, 2, 3, 9, 0))
    attendance_service.clock_out("e1", now=datetime(2026, 2, 3, 17, 0))
    with pytest.raises(ValidationError):
        attendance_service.clock_out("e1", now=datetime(2026, 2, 3, 18, 0))


def _seed_february(attendance_repo, leaves):
    # e1 has Sundays off (Feb 1 and Feb 8, 2026).
    attendance_repo.add("e1", datetime(2026, 2, 2, 10, 30))
    attendance_repo.add("e1", datetime(2026, 2, 3, 11, 15))
    attendance_repo.add("e1", datetime(2026, 2, 4, 11, 30))
    attendance_repo.add("e1", datetime(2026, 2, 6, 11, 5))
    attendance_repo.add("e1", datetime(2026, 2, 9, 10, 0))
    leaves.requests.append(make_leave("e1", date(2026, 2, 6)))


def test_classify_month_counts_and_order(attendance_service, attendance_repo, leaves):
    _seed_february(attendance_repo, leaves)

    monthly = attendance_service.classify_month("e1", 2026, 2, today=date(2026, 2, 10))

    assert len(monthly.days) == 10
    assert monthly.days[0].work_date == date(2026, 2, 10)
    assert monthly.days[0].status is None
    counts = monthly.counts
    assert counts[AttendanceStatus.WEEK_OFF] == 2
    assert counts[AttendanceStatus.PRESENT] == 2
    assert counts[AttendanceStatus.LATE] == 2
    assert counts[AttendanceStatus.ABSENT] == 2
    assert counts[AttendanceStatus.LEAVE] == 1
    assert monthly.late_count == 2
    assert monthly.config_incomplete is False


def test_classify_month_flags_missing_cutoff(attendance_service, attendance_repo, leaves, settings_repo):
    _seed_february(attendance_repo, leaves)
    settings_repo.settings = make_settings(max_clocking_time=None)

    monthly = attendance_service.classify_month("e1", 2026, 2, today=date(2026, 2, 10))

    assert monthly.late_count == 0
    assert monthly.counts[AttendanceStatus.PRESENT] == 4
    assert monthly.config_incomplete is True


def test_classify_month_rejects_bad_month(attendance_service):
    with pytest.raises(InvalidDateError):
        attendance_service.classify_month("e1", 2026, 13, today=date(2026, 2, 10))


def test_history_rows_shape(attendance_service, attendance_repo, leaves):
    _seed_february(attendance_repo, leaves)

    data = attendance_service.history_rows("e1", 2026, 2, today=date(2026, 2, 10))

    assert data["month"] == "2026-02"
    assert data["counts"]["late"] == 2
    tuesday = next(d for d in data["days"] if d["date"] == "2026-02-03")
    assert tuesday["status"] == "late"
    assert tuesday["clock_in"] == "11:15"
    assert tuesday["clock_out"] == "-"
    assert data["employee_name"] == "Asha E1"


def test_history_rows_show_zero_hour_shift(attendance_service):
    attendance_service.clock_in("e1", now=datetime(2026, 2, 9, 9, 0))
    attendance_service.clock_out("e1", now=datetime(2026, 2, 9, 9, 2))

    data = attendance_service.history_rows("e1", 2026, 2, today=date(2026, 2, 10))

    monday = next(d for d in data["days"] if d["date"] == "2026-02-09")
    assert monday["total_hours"] == "0.0h"
    assert monday["clock_out"] == "09:02"


def test_auto_clock_out_closes_open_records(attendance_service, attendance_repo):
    attendance_repo.add("e1", datetime(2026, 2, 10, 9, 0))

    assert attendance_service.auto_clock_out(now=datetime(2026, 2, 10, 18, 0)) == 0
    assert attendance_service.auto_clock_out(now=datetime(2026, 2, 10, 19, 45)) == 1

    rec = attendance_repo.get_for_employee_and_date("e1", date(2026, 2, 10))
    assert rec.clock_out == datetime(2026, 2, 10, 19, 30)
    assert rec.total_hours == Decimal("10.5")
    assert attendance_service.auto_clock_out(now=datetime(2026, 2, 10, 20, 0)) == 0


def test_auto_clock_out_skipped_without_setting(attendance_service, attendance_repo, settings_repo):
    settings_repo.settings = make_settings(auto_clock_out_time=None)
    attendance_repo.add("e1", datetime(2026, 2, 10, 9, 0))
    assert attendance_service.auto_clock_out(now=datetime(2026, 2, 10, 23, 0)) == 0


def test_mark_absences_writes_status_rows(attendance_service, attendance_repo, employees):
    # 2026-02-05 is a Thursday (4 with Sunday=0).
    employees.by_id["e2"] = make_employee("e2", week_off_day=None)
    employees.by_id["e3"] = make_employee("e3", week_off_day=4)
    attendance_repo.add("e2", datetime(2026, 2, 5, 9, 0))
    day = date(2026, 2, 5)

    written = attendance_service.mark_absences(day, today=date(2026, 2, 6))

    assert written == 2
    assert attendance_repo.get_for_employee_and_date("e1", day).status == AttendanceStatus.ABSENT
    assert attendance_repo.get_for_employee_and_date("e2", day).status == AttendanceStatus.PRESENT
    assert attendance_repo.get_for_employee_and_date("e3", day).status == AttendanceStatus.WEEK_OFF


def test_mark_absences_refuses_current_day(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.mark_absences(date(2026, 2, 6), today=date(2026, 2, 6))


def test_reclassify_day_after_backdated_leave(attendance_service, attendance_repo, leaves):
    attendance_repo.add("e1", datetime(2026, 2, 3, 11, 20), status=AttendanceStatus.LATE)
    leaves.requests.append(make_leave("e1", date(2026, 2, 3)))

    result = attendance_service.reclassify_day("e1", date(2026, 2, 3), today=date(2026, 2, 10))

    assert result.status == AttendanceStatus.LEAVE
    assert attendance_repo.get_for_employee_and_date("e1", date(2026, 2, 3)).status == AttendanceStatus.LEAVE
