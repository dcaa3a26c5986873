from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    def list_approved_overlapping(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """Approved requests of one employee whose range overlaps [start_date, end_date]."""

        raise NotImplementedError

    def get_balance(self, *, employee_id: str, leave_type_id: str, year: int) -> Optional[LeaveBalance]:
        raise NotImplementedError
