from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityCache(Generic[T]):
    """In-process copy of one backend table, keyed by id.

    Loaded wholesale on first use (or on refresh) and then patched locally by the
    cached repositories, only after the backend confirmed a mutation.
    """

    def __init__(self, loader: Callable[[], Sequence[T]], key: Callable[[T], str], *, name: str):
        self._loader = loader
        self._key = key
        self._name = name
        self._items: Optional[Dict[str, T]] = None

    @property
    def loaded(self) -> bool:
        return self._items is not None

    def refresh(self) -> None:
        items = self._loader()
        self._items = {self._key(item): item for item in items}
        logger.debug("Loaded %d %s into cache", len(self._items), self._name)

    def _ensure(self) -> Dict[str, T]:
        if self._items is None:
            self.refresh()
        return self._items  # type: ignore[return-value]

    def all(self) -> List[T]:
        return list(self._ensure().values())

    def get(self, key: str) -> Optional[T]:
        return self._ensure().get(key)

    def put(self, item: T) -> None:
        self._ensure()[self._key(item)] = item

    def remove(self, key: str) -> bool:
        return self._ensure().pop(key, None) is not None

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        items = self._ensure()
        doomed = [k for k, v in items.items() if predicate(v)]
        for k in doomed:
            del items[k]
        return len(doomed)

    def replace_where(self, predicate: Callable[[T], bool], change: Callable[[T], T]) -> int:
        items = self._ensure()
        count = 0
        for k, v in list(items.items()):
            if predicate(v):
                items[k] = change(v)
                count += 1
        return count
