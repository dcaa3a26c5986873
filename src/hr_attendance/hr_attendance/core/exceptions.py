from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateError(ValidationError):
    """Raised for malformed dates, times or year/month pairs."""


class ConfigIncompleteError(DomainError):
    """Raised when the organisation settings lack a field an evaluation needs."""

    def __init__(self, missing: Sequence[str]):
        self.missing = tuple(missing)
        super().__init__(f"Settings incomplete: missing {', '.join(self.missing)}")


class UnresolvedLeaveTypeError(DomainError):
    """Raised when the late-policy leave type has no balance row for the employee/year."""

    def __init__(self, *, employee_id: str, leave_type_id: str, year: int):
        self.employee_id = employee_id
        self.leave_type_id = leave_type_id
        self.year = year
        super().__init__(
            f"No leave balance for employee {employee_id}, leave type {leave_type_id}, year {year}"
        )


class ConcurrentUpdateError(DomainError):
    """Raised when a compare-and-set keeps losing to concurrent writers."""
