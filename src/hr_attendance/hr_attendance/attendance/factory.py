from __future__ import annotations

from dataclasses import dataclass

from .model import DayContext
from .strategies.absent_strategy import AbsentStrategy, PendingStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.normal_strategy import NoCutoffStrategy, NormalStrategy
from .strategies.week_off_strategy import WeekOffStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy for a day; the order of checks is the precedence."""

    def for_day(self, ctx: DayContext) -> AttendanceStrategy:
        if ctx.is_week_off:
            return WeekOffStrategy()

        if ctx.approved_leave is not None:
            return LeaveStrategy()

        if ctx.clock_in is None:
            if ctx.has_elapsed:
                return AbsentStrategy()
            return PendingStrategy()

        cutoff = ctx.settings.max_clocking_time if ctx.settings else None
        if cutoff is None:
            return NoCutoffStrategy()
        if ctx.clock_in.time() > cutoff:
            return LateStrategy()
        return NormalStrategy()
