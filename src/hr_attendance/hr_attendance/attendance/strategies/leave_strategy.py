from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import DayContext
from .base import AttendanceStrategy, StatusDecision


class LeaveStrategy(AttendanceStrategy):
    """Approved leave covers the day (half-day leave included)."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        leave = ctx.approved_leave
        note = None
        if leave is not None and leave.half_day:
            period = leave.half_day_period.value if leave.half_day_period else "unspecified"
            note = f"half-day leave ({period})"
        return StatusDecision(status=AttendanceStatus.LEAVE, note=note)
