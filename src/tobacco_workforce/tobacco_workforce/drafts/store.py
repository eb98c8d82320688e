from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Protocol

from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError
from .model import Draft, DraftKey

logger = logging.getLogger(__name__)


class DraftStore(Protocol):
    def save(self, key: DraftKey, data: dict, *, now: Optional[datetime] = None) -> Draft:
        raise NotImplementedError

    def load(self, key: DraftKey, *, now: Optional[datetime] = None) -> Optional[Draft]:
        raise NotImplementedError

    def clear(self, key: DraftKey) -> bool:
        raise NotImplementedError


class JsonDraftStore(DraftStore):
    """Drafts kept in one local JSON file, keyed by `DraftKey.storage_key`.

    Expired drafts are dropped when read and by `purge_expired`.
    """

    def __init__(self, path: str | Path, *, ttl: timedelta):
        self._path = Path(path)
        self._ttl = ttl

    def _read_raw(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError):
            logger.exception("Draft file %s is unreadable; starting empty", self._path)
            return {}
        return raw if isinstance(raw, dict) else {}

    @staticmethod
    def _saved_at(record) -> Optional[datetime]:
        if not isinstance(record, dict) or not isinstance(record.get("saved_at"), str):
            return None
        if not isinstance(record.get("data", {}), dict):
            return None
        try:
            return datetime.fromisoformat(record["saved_at"])
        except ValueError:
            return None

    def _read(self) -> dict:
        """Well-formed records only; malformed ones are logged and dropped on the next write."""
        drafts = {}
        for k, v in self._read_raw().items():
            if self._saved_at(v) is None:
                logger.warning("Skipping malformed draft %s in %s", k, self._path)
                continue
            drafts[k] = v
        return drafts

    def _write(self, drafts: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self._path.parent), prefix=".drafts-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(drafts, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    @staticmethod
    def _decode(key: DraftKey, record: dict) -> Draft:
        return Draft(
            key=key,
            data=dict(record.get("data") or {}),
            saved_at=JsonDraftStore._saved_at(record),
        )

    def save(self, key: DraftKey, data: dict, *, now: Optional[datetime] = None) -> Draft:
        if not isinstance(data, dict):
            raise ValidationError("Draft data must be an object")
        draft = Draft(key=key, data=dict(data), saved_at=now or now_local())
        drafts = self._read()
        drafts[key.storage_key] = {"data": draft.data, "saved_at": draft.saved_at.isoformat()}
        self._write(drafts)
        logger.debug("Saved draft %s", key.storage_key)
        return draft

    def load(self, key: DraftKey, *, now: Optional[datetime] = None) -> Optional[Draft]:
        drafts = self._read()
        record = drafts.get(key.storage_key)
        if not record:
            return None
        draft = self._decode(key, record)
        if draft.is_expired(now or now_local(), self._ttl):
            del drafts[key.storage_key]
            self._write(drafts)
            logger.debug("Dropped expired draft %s", key.storage_key)
            return None
        return draft

    def clear(self, key: DraftKey) -> bool:
        drafts = self._read()
        if drafts.pop(key.storage_key, None) is None:
            return False
        self._write(drafts)
        return True

    def purge_expired(self, *, now: Optional[datetime] = None) -> int:
        """Drop expired and malformed drafts. Returns how many were removed."""
        now = now or now_local()
        raw = self._read_raw()
        kept = {
            k: v for k, v in self._read().items() if now - self._saved_at(v) <= self._ttl
        }
        removed = len(raw) - len(kept)
        if removed:
            self._write(kept)
        return removed
