"""Scheduled batch (e.g. cron at 23:55): auto clock-out, absence marking, late policy.

Usage: python scripts/run_daily_jobs.py [--date YYYY-MM-DD]
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_attendance.hr_attendance.common.datetime_utils import now_local, parse_iso_date
from src.hr_attendance.hr_attendance.container import build_container

logger = logging.getLogger("run_daily_jobs")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--date", help="evaluation day (defaults to today)")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG)

    now = now_local()
    if args.date:
        now = datetime.combine(parse_iso_date(args.date), now.time())
    today = now.date()
    yesterday = today - timedelta(days=1)

    container.attendance_service.auto_clock_out(now=now)
    container.attendance_service.mark_absences(yesterday, today=today)
    months = {(yesterday.year, yesterday.month), (today.year, today.month)}
    failed = 0
    for year, month in sorted(months):
        report = container.late_policy_service.evaluate_all(year, month, today=today)
        for employee_id, message in report.failures:
            logger.error("late policy %04d-%02d: %s -> %s", year, month, employee_id, message)
        failed += len(report.failures)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
