from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.validators import to_decimal
from ..core.enums import HalfDayPeriod, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_overlapping(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, leave_type_id, start_date, end_date,
                       status, reason, half_day, half_day_period
                FROM leave_requests
                WHERE employee_id=%s AND status=%s AND start_date<=%s AND end_date>=%s
                ORDER BY start_date ASC
                """,
                (employee_id, RequestStatus.APPROVED.value, end_date, start_date),
            )
            return [
                LeaveRequest(
                    request_id=int(r["request_id"]),
                    employee_id=str(r["employee_id"]),
                    leave_type_id=str(r["leave_type_id"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=RequestStatus(r["status"]),
                    reason=r.get("reason"),
                    half_day=bool(r.get("half_day")),
                    half_day_period=HalfDayPeriod(r["half_day_period"]) if r.get("half_day_period") else None,
                )
                for r in fetchall(cur)
            ]

    def get_balance(self, *, employee_id: str, leave_type_id: str, year: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT balance_id, employee_id, leave_type_id, year, total_days, used_days
                FROM leave_balances
                WHERE employee_id=%s AND leave_type_id=%s AND year=%s
                """,
                (employee_id, leave_type_id, int(year)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveBalance(
                balance_id=int(r["balance_id"]),
                employee_id=str(r["employee_id"]),
                leave_type_id=str(r["leave_type_id"]),
                year=int(r["year"]),
                total_days=to_decimal(r["total_days"], "total_days"),
                used_days=to_decimal(r["used_days"], "used_days"),
            )
