from __future__ import annotations

from typing import Optional

from ..common.validators import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Settings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[Settings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT settings_id, max_clocking_time, auto_clock_out_time, max_late_days,
                       late_policy_deduction_per_day, late_policy_leave_type_id, company_name
                FROM settings
                ORDER BY updated_at DESC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return Settings(
                settings_id=str(r["settings_id"]),
                max_clocking_time=normalize_mysql_time(r.get("max_clocking_time") or None),
                auto_clock_out_time=normalize_mysql_time(r.get("auto_clock_out_time") or None),
                max_late_days=int(r["max_late_days"]) if r.get("max_late_days") is not None else None,
                late_policy_deduction_per_day=to_decimal(
                    r.get("late_policy_deduction_per_day"), "late_policy_deduction_per_day"
                ),
                late_policy_leave_type_id=r.get("late_policy_leave_type_id") or None,
                company_name=r.get("company_name") or "",
            )
