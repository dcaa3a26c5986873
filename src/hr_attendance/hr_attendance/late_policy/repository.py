from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol

from .model import LateDeductionLog


class LateDeductionRepository(Protocol):
    def get_log(self, *, employee_id: str, year: int, month: int) -> Optional[LateDeductionLog]:
        raise NotImplementedError

    def apply_deduction(
        self,
        *,
        employee_id: str,
        year: int,
        month: int,
        leave_type_id: str,
        expected_total: Decimal,
        new_total: Decimal,
        late_count: int,
    ) -> bool:
        """Atomically move the month's log from `expected_total` to `new_total` and add the
        difference to the leave balance's `used_days`.

        Returns False (nothing written) when the stored total is no longer `expected_total`.
        Raises UnresolvedLeaveTypeError when the balance row does not exist.
        """

        raise NotImplementedError
