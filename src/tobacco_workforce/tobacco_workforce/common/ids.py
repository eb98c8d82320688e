from __future__ import annotations

import random
import re
import time

from ..core.constants import SCHEDULE_ID_PREFIX


def _time_suffix() -> str:
    return str(int(time.time() * 1000))[-6:]


def _random_suffix() -> str:
    return f"{random.randint(0, 999):03d}"


def generate_id(prefix: str) -> str:
    """Return `<PREFIX>-<6-digit time suffix>-<3-digit random>`.

    There is no uniqueness check; collisions are accepted as negligible.
    """
    return f"{prefix}-{_time_suffix()}-{_random_suffix()}"


def task_prefix(task: str) -> str:
    letters = re.sub(r"[^A-Za-z]", "", task or "").upper()
    return (letters + "XXXX")[:4]


def generate_schedule_id(task: str) -> str:
    """`SCH-<4-letter task prefix>-<6-digit time suffix>-<3-digit random>`."""
    return generate_id(f"{SCHEDULE_ID_PREFIX}-{task_prefix(task)}")
