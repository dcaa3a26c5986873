from __future__ import annotations

from typing import Optional

from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, DayClassification, DayContext


class AttendanceClassifier:
    """Maps one employee-day to present/late/absent/leave/week_off.

    Pure: no repository access, no clock reads. Callers gather the context.
    """

    def __init__(self, factory: Optional[AttendanceStrategyFactory] = None):
        self._factory = factory or AttendanceStrategyFactory()

    def classify(self, ctx: DayContext, *, record: Optional[AttendanceRecord] = None) -> DayClassification:
        decision = self._factory.for_day(ctx).decide(ctx)
        return DayClassification(
            work_date=ctx.work_date,
            status=decision.status,
            note=decision.note,
            config_incomplete=decision.config_incomplete,
            record=record,
        )
