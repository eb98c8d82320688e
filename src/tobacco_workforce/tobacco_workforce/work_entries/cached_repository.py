from __future__ import annotations

from typing import Sequence

from ..common.cache import EntityCache
from .model import EntryKey, WorkEntry
from .repository import WorkEntryRepository


class CachedWorkEntryRepository(WorkEntryRepository):
    """Serves reads from an in-process cache; writes go to `inner` first."""

    def __init__(self, inner: WorkEntryRepository):
        self._inner = inner
        self._cache: EntityCache[WorkEntry] = EntityCache(inner.list_all, lambda e: e.entry_id, name="work entries")

    def list_all(self) -> Sequence[WorkEntry]:
        return self._cache.all()

    def create(self, entry: WorkEntry) -> None:
        self._inner.create(entry)
        self._cache.put(entry)

    def set_locked(self, key: EntryKey, *, locked: bool) -> int:
        count = self._inner.set_locked(key, locked=locked)
        self._cache.replace_where(lambda e: e.matches(key), lambda e: e.with_locked(locked))
        return count

    def delete_for_schedule(self, schedule_id: str) -> int:
        count = self._inner.delete_for_schedule(schedule_id)
        self._cache.remove_where(lambda e: e.schedule_id == schedule_id)
        return count
