from __future__ import annotations

from typing import Optional, Sequence

from ..common.cache import EntityCache
from .model import Schedule
from .repository import ScheduleRepository


class CachedScheduleRepository(ScheduleRepository):
    """Serves reads from an in-process cache; writes go to `inner` first."""

    def __init__(self, inner: ScheduleRepository):
        self._inner = inner
        self._cache: EntityCache[Schedule] = EntityCache(inner.list_all, lambda s: s.schedule_id, name="schedules")

    def list_all(self) -> Sequence[Schedule]:
        return self._cache.all()

    def get_by_id(self, schedule_id: str) -> Optional[Schedule]:
        return self._cache.get(schedule_id)

    def create(self, schedule: Schedule) -> None:
        self._inner.create(schedule)
        self._cache.put(schedule)

    def update(self, schedule: Schedule) -> bool:
        ok = self._inner.update(schedule)
        if ok:
            self._cache.put(schedule)
        return ok

    def delete(self, schedule_id: str) -> bool:
        ok = self._inner.delete(schedule_id)
        if ok:
            self._cache.remove(schedule_id)
        return ok
