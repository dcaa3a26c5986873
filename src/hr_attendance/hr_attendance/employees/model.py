from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object (no DB access). `week_off_day` uses 0=Sunday..6=Saturday.
    """

    employee_id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    week_off_day: Optional[int] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
