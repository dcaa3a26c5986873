from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import require_year_month
from ..core.constants import MAX_DEDUCTION_ATTEMPTS
from ..core.enums import DeductionResult
from ..core.exceptions import (
    ConcurrentUpdateError,
    ConfigIncompleteError,
    DomainError,
    UnresolvedLeaveTypeError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from ..leave.repository import LeaveRepository
from ..settings.model import Settings
from ..settings.repository import SettingsRepository
from .model import BatchReport, LatePolicyOutcome
from .repository import LateDeductionRepository

logger = logging.getLogger(__name__)


class LatePolicyService:
    """Turns a month's late days into a leave-balance deduction, at most once per late day.

    The month's log row stores the cumulative deduction already applied. Each run computes
    the cumulative target from the current late count and applies only the difference, so
    repeated and out-of-order runs converge on the same state. A shrinking late count is
    reported but never refunded.
    """

    def __init__(
        self,
        logs: LateDeductionRepository,
        leaves: LeaveRepository,
        settings: SettingsRepository,
        employees: EmployeeRepository,
        attendance: AttendanceService,
        *,
        max_attempts: int = MAX_DEDUCTION_ATTEMPTS,
    ):
        self._logs = logs
        self._leaves = leaves
        self._settings = settings
        self._employees = employees
        self._attendance = attendance
        self._max_attempts = max(1, int(max_attempts))

    def evaluate(
        self,
        employee_id: str,
        year: int,
        month: int,
        late_count: int,
        settings: Optional[Settings],
    ) -> LatePolicyOutcome:
        year, month = require_year_month(year, month)
        if late_count < 0:
            raise ValidationError("late_count cannot be negative")

        if settings is None or not settings.late_policy_enabled:
            return LatePolicyOutcome(employee_id=employee_id, year=year, month=month, result=DeductionResult.DISABLED)

        missing = settings.missing_late_fields()
        if missing:
            raise ConfigIncompleteError(missing)

        leave_type_id = settings.late_policy_leave_type_id
        excess = max(0, late_count - settings.max_late_days)
        target = Decimal(excess) * settings.late_policy_deduction_per_day

        for attempt in range(1, self._max_attempts + 1):
            log = self._logs.get_log(employee_id=employee_id, year=year, month=month)
            previous = log.total_deducted if log else Decimal("0")
            outcome = dict(
                employee_id=employee_id,
                year=year,
                month=month,
                late_count=late_count,
                excess=excess,
                target_total=target,
                previous_total=previous,
            )

            if target == previous:
                return LatePolicyOutcome(result=DeductionResult.UNCHANGED, **outcome)

            if target < previous:
                logger.warning(
                    "Late count for %s in %04d-%02d dropped to %d; %s day(s) already deducted, not reversing",
                    employee_id,
                    year,
                    month,
                    late_count,
                    previous,
                )
                return LatePolicyOutcome(result=DeductionResult.COUNT_DECREASED, **outcome)

            balance = self._leaves.get_balance(employee_id=employee_id, leave_type_id=leave_type_id, year=year)
            if balance is None:
                raise UnresolvedLeaveTypeError(employee_id=employee_id, leave_type_id=leave_type_id, year=year)

            delta = target - previous
            if delta > balance.remaining_days:
                logger.warning(
                    "Late deduction of %s day(s) exceeds remaining %s of leave type %s for %s; balance goes negative",
                    delta,
                    balance.remaining_days,
                    leave_type_id,
                    employee_id,
                )
            applied = self._logs.apply_deduction(
                employee_id=employee_id,
                year=year,
                month=month,
                leave_type_id=leave_type_id,
                expected_total=previous,
                new_total=target,
                late_count=late_count,
            )
            if applied:
                logger.info(
                    "Deducted %s day(s) of leave type %s from %s for %04d-%02d (late=%d, total=%s)",
                    delta,
                    leave_type_id,
                    employee_id,
                    year,
                    month,
                    late_count,
                    target,
                )
                return LatePolicyOutcome(result=DeductionResult.APPLIED, applied_delta=delta, **outcome)

            logger.info(
                "Late log for %s %04d-%02d changed concurrently (attempt %d/%d); re-reading",
                employee_id,
                year,
                month,
                attempt,
                self._max_attempts,
            )

        raise ConcurrentUpdateError(
            f"Could not apply late deduction for {employee_id} {year:04d}-{month:02d} "
            f"after {self._max_attempts} attempts"
        )

    def evaluate_month(self, employee_id: str, year: int, month: int, *, today: date) -> LatePolicyOutcome:
        """Count the month's late days with the classifier and evaluate the policy."""
        settings = self._settings.get()
        if settings is None or not settings.late_policy_enabled:
            year, month = require_year_month(year, month)
            return LatePolicyOutcome(employee_id=employee_id, year=year, month=month, result=DeductionResult.DISABLED)

        monthly = self._attendance.classify_month(employee_id, year, month, today=today)
        return self.evaluate(employee_id, year, month, monthly.late_count, settings)

    def evaluate_all(self, year: int, month: int, *, today: date) -> BatchReport:
        outcomes = []
        failures = []
        for employee in self._employees.list_active():
            try:
                outcomes.append(self.evaluate_month(employee.employee_id, year, month, today=today))
            except DomainError as e:
                logger.error("Late policy failed for %s %s-%s: %s", employee.employee_id, year, month, e)
                failures.append((employee.employee_id, str(e)))
            except Exception as e:
                logger.exception("Late policy crashed for %s %s-%s", employee.employee_id, year, month)
                failures.append((employee.employee_id, f"{type(e).__name__}: {e}"))

        report = BatchReport(outcomes=tuple(outcomes), failures=tuple(failures))
        logger.info(
            "Late policy batch %s-%s: %d evaluated, %d applied, %d failed",
            year,
            month,
            len(report.outcomes),
            report.applied,
            len(report.failures),
        )
        return report
