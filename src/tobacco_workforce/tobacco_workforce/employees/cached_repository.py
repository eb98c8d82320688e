from __future__ import annotations

from typing import Optional, Sequence

from ..common.cache import EntityCache
from .model import Employee
from .repository import EmployeeRepository


class CachedEmployeeRepository(EmployeeRepository):
    """Serves reads from an in-process cache; writes go to `inner` first."""

    def __init__(self, inner: EmployeeRepository):
        self._inner = inner
        self._cache: EntityCache[Employee] = EntityCache(inner.list_all, lambda e: e.employee_id, name="employees")

    def list_all(self) -> Sequence[Employee]:
        return self._cache.all()

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._cache.get(employee_id)

    def create(self, employee: Employee) -> None:
        self._inner.create(employee)
        self._cache.put(employee)

    def update(self, employee: Employee) -> bool:
        ok = self._inner.update(employee)
        if ok:
            self._cache.put(employee)
        return ok

    def delete_by_id(self, employee_id: str) -> bool:
        ok = self._inner.delete_by_id(employee_id)
        if ok:
            self._cache.remove(employee_id)
        return ok
