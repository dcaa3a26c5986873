from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import DayContext
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Clock-in at or before the late cutoff."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)


class NoCutoffStrategy(AttendanceStrategy):
    """Clock-in while no late cutoff is configured: present, flagged as config-incomplete."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.PRESENT,
            note="late cutoff not configured",
            config_incomplete=True,
        )
