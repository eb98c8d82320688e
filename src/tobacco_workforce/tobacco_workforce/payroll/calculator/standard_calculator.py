from __future__ import annotations

from .base import PayrollCalculator
from ...work_entries.model import WorkEntry


class StandardPayrollCalculator(PayrollCalculator):
    """Piece rate: quantity * rate, not below 0."""

    def amount(self, entry: WorkEntry, rate: float) -> float:
        return max(float(entry.quantity or 0) * float(rate or 0), 0.0)
