from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from car_registry.ports.clock import Clock

_TICK = timedelta(microseconds=1)


class SystemClock(Clock):
    """
    Wall-clock time in UTC, strictly increasing across calls.

    Two calls inside the same clock tick (or after the wall clock steps
    backwards) get distinct, ordered timestamps, so an update always lands
    after the create it follows.
    """

    def __init__(self) -> None:
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = datetime.now(timezone.utc)
            if self._last is not None and current <= self._last:
                current = self._last + _TICK
            self._last = current
            return current
