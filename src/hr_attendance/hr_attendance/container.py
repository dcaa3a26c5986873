from __future__ import annotations

from dataclasses import dataclass

from .attendance.classifier import AttendanceClassifier
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .late_policy.mysql_late_deduction_repository import MySQLLateDeductionRepository
from .late_policy.service import LatePolicyService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    settings_repo: MySQLSettingsRepository
    leave_repo: MySQLLeaveRepository
    attendance_repo: MySQLAttendanceRepository
    late_deduction_repo: MySQLLateDeductionRepository

    attendance_service: AttendanceService
    late_policy_service: LatePolicyService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    late_deduction_repo = MySQLLateDeductionRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        leave_repo,
        settings_repo,
        classifier=AttendanceClassifier(AttendanceStrategyFactory()),
    )
    late_policy_service = LatePolicyService(
        late_deduction_repo,
        leave_repo,
        settings_repo,
        employees_repo,
        attendance_service,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        settings_repo=settings_repo,
        leave_repo=leave_repo,
        attendance_repo=attendance_repo,
        late_deduction_repo=late_deduction_repo,
        attendance_service=attendance_service,
        late_policy_service=late_policy_service,
    )
