from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_week_off_day(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    day = int(value)
    if not 0 <= day <= 6:
        raise ValidationError("week_off_day must be between 0 (Sunday) and 6 (Saturday)")
    return day


def to_decimal(value: Any, field_name: str) -> Optional[Decimal]:
    """Convert DB/JSON numbers to Decimal (via str so 0.5 stays 0.5)."""
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a number: {value!r}")
