from __future__ import annotations

from typing import Protocol, Sequence

from .model import EntryKey, WorkEntry


class WorkEntryRepository(Protocol):
    def list_all(self) -> Sequence[WorkEntry]:
        raise NotImplementedError

    def create(self, entry: WorkEntry) -> None:
        raise NotImplementedError

    def set_locked(self, key: EntryKey, *, locked: bool) -> int:
        """Flip `locked` on every row of the triple. Returns affected row count."""

        raise NotImplementedError

    def delete_for_schedule(self, schedule_id: str) -> int:
        raise NotImplementedError
