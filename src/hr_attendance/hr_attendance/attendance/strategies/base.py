from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import DayContext


@dataclass(frozen=True)
class StatusDecision:
    status: Optional[AttendanceStatus]
    note: Optional[str] = None
    config_incomplete: bool = False


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a day's attendance status."""

    @abstractmethod
    def decide(self, ctx: DayContext) -> StatusDecision:
        raise NotImplementedError
