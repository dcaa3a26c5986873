from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DeductionResult


@dataclass(frozen=True)
class LateDeductionLog:
    """Cumulative late-policy deduction already applied for one employee-month."""

    log_id: int
    employee_id: str
    year: int
    month: int
    last_deducted_late_count: int
    total_deducted: Decimal
    leave_type_id: Optional[str] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class LatePolicyOutcome:
    employee_id: str
    year: int
    month: int
    result: DeductionResult
    late_count: int = 0
    excess: int = 0
    target_total: Decimal = Decimal("0")
    previous_total: Decimal = Decimal("0")
    applied_delta: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year": self.year,
            "month": self.month,
            "result": self.result.value,
            "late_count": self.late_count,
            "excess": self.excess,
            "target_total": str(self.target_total),
            "previous_total": str(self.previous_total),
            "applied_delta": str(self.applied_delta),
        }


@dataclass(frozen=True)
class BatchReport:
    outcomes: tuple[LatePolicyOutcome, ...]
    failures: tuple[tuple[str, str], ...]

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.result == DeductionResult.APPLIED)
