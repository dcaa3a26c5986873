"""Example: use the service layer directly (no Flask).

Prints the current month's classified days and the late-policy outcome for one employee.
"""

import importlib
import sys
from datetime import date

from config import get_settings_module

from src.hr_attendance.hr_attendance.container import build_container


def main(employee_id: str):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    today = date.today()
    print(container.attendance_service.history_rows(employee_id, today.year, today.month, today=today))
    print(container.late_policy_service.evaluate_month(employee_id, today.year, today.month, today=today).to_dict())


if __name__ == "__main__":
    main(sys.argv[1])
