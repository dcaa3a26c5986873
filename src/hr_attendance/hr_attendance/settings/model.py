from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Organisation-wide attendance and late-policy configuration (singleton row)."""

    settings_id: str
    max_clocking_time: Optional[time] = None
    auto_clock_out_time: Optional[time] = None
    max_late_days: Optional[int] = None
    late_policy_deduction_per_day: Optional[Decimal] = None
    late_policy_leave_type_id: Optional[str] = None
    company_name: str = ""

    @property
    def late_policy_enabled(self) -> bool:
        return bool(self.late_policy_leave_type_id)

    def missing_late_fields(self) -> list[str]:
        missing = []
        if self.max_late_days is None:
            missing.append("max_late_days")
        if self.late_policy_deduction_per_day is None:
            missing.append("late_policy_deduction_per_day")
        return missing
