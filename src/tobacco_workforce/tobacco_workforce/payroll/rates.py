from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from ..common.validators import require_non_empty, require_non_negative
from ..core.constants import DEFAULT_PAY_RATES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayRateTable:
    """Task name -> rate per unit of quantity. Tasks without a rate pay 0."""

    rates: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def defaults(cls) -> "PayRateTable":
        return cls(dict(DEFAULT_PAY_RATES))

    @classmethod
    def from_dict(cls, data: Mapping) -> "PayRateTable":
        return cls({require_non_empty(k, "Task"): require_non_negative(v, f"Rate for {k}") for k, v in data.items()})

    def rate_for(self, task: str) -> float:
        if task in self.rates:
            return float(self.rates[task])
        wanted = (task or "").strip().lower()
        for name, rate in self.rates.items():
            if name.lower() == wanted:
                return float(rate)
        return 0.0

    def with_rate(self, task: str, rate) -> "PayRateTable":
        rates = dict(self.rates)
        rates[require_non_empty(task, "Task")] = require_non_negative(rate, f"Rate for {task}")
        return PayRateTable(rates)

    def to_dict(self) -> dict[str, float]:
        return {k: float(v) for k, v in self.rates.items()}


class JsonPayRateStore:
    """Pay rates in a local JSON file; they never go to the shared database."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> PayRateTable:
        if not self._path.exists():
            return PayRateTable.defaults()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return PayRateTable.from_dict(raw)
        except Exception:
            logger.exception("Pay rate file %s is unreadable; using defaults", self._path)
            return PayRateTable.defaults()

    def save(self, table: PayRateTable) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(table.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
        logger.info("Saved %d pay rate(s) to %s", len(table.rates), self._path)
