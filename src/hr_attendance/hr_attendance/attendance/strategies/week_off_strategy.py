from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import DayContext
from .base import AttendanceStrategy, StatusDecision


class WeekOffStrategy(AttendanceStrategy):
    """Employee's configured weekly day off; overrides clock events and leave."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.WEEK_OFF)
