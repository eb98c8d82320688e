from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def list_all(self) -> Sequence[Schedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: str) -> Optional[Schedule]:
        raise NotImplementedError

    def create(self, schedule: Schedule) -> None:
        raise NotImplementedError

    def update(self, schedule: Schedule) -> bool:
        """Replace date and items of an existing schedule (no merge)."""

        raise NotImplementedError

    def delete(self, schedule_id: str) -> bool:
        raise NotImplementedError
