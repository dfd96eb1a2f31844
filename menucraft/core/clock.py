# menucraft/core/clock.py

"""
Injectable time and id sources.

Services never call ``datetime.now()`` or ``uuid4()`` directly; they take a
Clock and an IdGenerator so tests can pin both.
"""

import itertools
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from .config import settings


class Clock:
    """Current-time source"""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall clock in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock pinned to an instant, advanced manually"""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime):
        self._instant = instant

    def advance(self, **kwargs) -> datetime:
        self._instant = self._instant + timedelta(**kwargs)
        return self._instant


class IdGenerator:
    """Opaque id source"""

    def generate(self, prefix: str) -> str:
        raise NotImplementedError


class UuidIdGenerator(IdGenerator):
    def generate(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex}"


class SequentialIdGenerator(IdGenerator):
    """Deterministic ids: ``item_1``, ``item_2``, ... (one counter shared by all prefixes)"""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def generate(self, prefix: str) -> str:
        return f"{prefix}_{next(self._counter)}"


def format_last_modified(instant: datetime, fmt: Optional[str] = None) -> str:
    """Render an instant the way ``last_modified`` columns are displayed"""
    return instant.strftime(fmt or settings.LAST_MODIFIED_FORMAT)
