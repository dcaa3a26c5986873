from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import DayContext
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Clock-in after the configured late cutoff."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        cutoff = ctx.settings.max_clocking_time.strftime("%H:%M")
        return StatusDecision(
            status=AttendanceStatus.LATE,
            note=f"clocked in at {ctx.clock_in:%H:%M} (cutoff {cutoff})",
        )
