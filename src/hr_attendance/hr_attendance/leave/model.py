from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import HalfDayPeriod, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: str
    leave_type_id: str
    start_date: date
    end_date: date
    status: RequestStatus
    reason: Optional[str] = None
    half_day: bool = False
    half_day_period: Optional[HalfDayPeriod] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class LeaveBalance:
    balance_id: int
    employee_id: str
    leave_type_id: str
    year: int
    total_days: Decimal
    used_days: Decimal

    @property
    def remaining_days(self) -> Decimal:
        return self.total_days - self.used_days
