from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import DayContext
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Elapsed day with no clock-in."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)


class PendingStrategy(AttendanceStrategy):
    """Today (or later) with no clock-in yet: nothing to decide."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=None)
