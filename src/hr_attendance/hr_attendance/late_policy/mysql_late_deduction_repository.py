from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

import mysql.connector
from mysql.connector import errorcode

from ..common.validators import to_decimal
from ..core.exceptions import UnresolvedLeaveTypeError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import LateDeductionLog
from .repository import LateDeductionRepository

logger = logging.getLogger(__name__)

# InnoDB aborts one of two first-row inserts racing on the same gap lock.
_LOST_LOCK_ERRORS = (errorcode.ER_LOCK_DEADLOCK, errorcode.ER_LOCK_WAIT_TIMEOUT)


class MySQLLateDeductionRepository(LateDeductionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_log(self, *, employee_id: str, year: int, month: int) -> Optional[LateDeductionLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, employee_id, year, month, last_deducted_late_count,
                       total_deducted, leave_type_id, updated_at
                FROM late_deduction_logs
                WHERE employee_id=%s AND year=%s AND month=%s
                """,
                (employee_id, int(year), int(month)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LateDeductionLog(
                log_id=int(r["log_id"]),
                employee_id=str(r["employee_id"]),
                year=int(r["year"]),
                month=int(r["month"]),
                last_deducted_late_count=int(r["last_deducted_late_count"]),
                total_deducted=to_decimal(r["total_deducted"], "total_deducted"),
                leave_type_id=r.get("leave_type_id"),
                updated_at=r.get("updated_at"),
            )

    def apply_deduction(
        self,
        *,
        employee_id: str,
        year: int,
        month: int,
        leave_type_id: str,
        expected_total: Decimal,
        new_total: Decimal,
        late_count: int,
    ) -> bool:
        try:
            return self._apply(
                employee_id=employee_id,
                year=year,
                month=month,
                leave_type_id=leave_type_id,
                expected_total=expected_total,
                new_total=new_total,
                late_count=late_count,
            )
        except mysql.connector.Error as e:
            if e.errno not in _LOST_LOCK_ERRORS:
                raise
            logger.info("Late log for %s %04d-%02d lost a lock race (%s)", employee_id, year, month, e.errno)
            return False

    def _apply(
        self,
        *,
        employee_id: str,
        year: int,
        month: int,
        leave_type_id: str,
        expected_total: Decimal,
        new_total: Decimal,
        late_count: int,
    ) -> bool:
        delta = new_total - expected_total
        # One connection, one transaction: db_cursor rolls back if anything below raises.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT total_deducted
                FROM late_deduction_logs
                WHERE employee_id=%s AND year=%s AND month=%s
                FOR UPDATE
                """,
                (employee_id, int(year), int(month)),
            )
            row = fetchone(cur)
            current = to_decimal(row["total_deducted"], "total_deducted") if row else Decimal("0")
            if current != expected_total:
                return False

            if row:
                cur.execute(
                    """
                    UPDATE late_deduction_logs
                    SET total_deducted=%s, last_deducted_late_count=%s, leave_type_id=%s
                    WHERE employee_id=%s AND year=%s AND month=%s AND total_deducted=%s
                    """,
                    (new_total, int(late_count), leave_type_id, employee_id, int(year), int(month), expected_total),
                )
                if cur.rowcount == 0:
                    return False
            else:
                try:
                    cur.execute(
                        """
                        INSERT INTO late_deduction_logs(
                            employee_id, year, month, last_deducted_late_count, total_deducted, leave_type_id
                        )
                        VALUES(%s,%s,%s,%s,%s,%s)
                        """,
                        (employee_id, int(year), int(month), int(late_count), new_total, leave_type_id),
                    )
                except mysql.connector.IntegrityError as e:
                    if e.errno != errorcode.ER_DUP_ENTRY:
                        raise
                    logger.info("Late log for %s %04d-%02d created concurrently", employee_id, year, month)
                    return False

            cur.execute(
                """
                UPDATE leave_balances
                SET used_days = used_days + %s
                WHERE employee_id=%s AND leave_type_id=%s AND year=%s
                """,
                (delta, employee_id, leave_type_id, int(year)),
            )
            if cur.rowcount == 0:
                raise UnresolvedLeaveTypeError(employee_id=employee_id, leave_type_id=leave_type_id, year=int(year))
            return True
