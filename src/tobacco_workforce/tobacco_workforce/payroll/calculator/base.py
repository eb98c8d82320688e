from __future__ import annotations

from abc import ABC, abstractmethod

from ...work_entries.model import WorkEntry


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def amount(self, entry: WorkEntry, rate: float) -> float:
        raise NotImplementedError
