"""
Sortable, time-derived record keys.

Format (27 chars, no separators)::

    YYYYMMDD T HHMMSS lll nnnnnnnnn
    20131104T013755123004567890

``lll`` is the wall clock's milliseconds and ``nnnnnnnnn`` the nanosecond
component of the high-resolution timer, zero-padded so every key has the same
width and plain string comparison matches time order.
"""
from __future__ import annotations
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable

STAMP_LEN = 15  # YYYYMMDDTHHMMSS

def format_key(wall_ns: int, hr_ns: int) -> str:
    now = datetime.fromtimestamp(wall_ns // 1_000_000_000, tz=timezone.utc)
    millis = (wall_ns // 1_000_000) % 1000
    nanos = hr_ns % 1_000_000_000
    return f"{now:%Y%m%dT%H%M%S}{millis:03d}{nanos:09d}"

def _bump(key: str) -> str:
    digits = key[STAMP_LEN:]
    n = int(digits) + 1
    if n < 10 ** len(digits):
        return key[:STAMP_LEN] + f"{n:0{len(digits)}d}"
    # sub-second digits exhausted: carry into the next second
    stamp = datetime.strptime(key[:STAMP_LEN], "%Y%m%dT%H%M%S") + timedelta(seconds=1)
    return f"{stamp:%Y%m%dT%H%M%S}" + "0" * len(digits)

class SortableKeyGenerator:
    """Issues strictly increasing keys.

    If the clocks produce a key that does not sort after the previous one
    (same tick, timer wrap, or the wall clock stepping back) the previous key's
    sub-second digits are incremented instead.
    """

    def __init__(
        self,
        wall_clock_ns: Callable[[], int] = time.time_ns,
        hrtime_ns: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self._wall = wall_clock_ns
        self._hr = hrtime_ns
        self._last: str | None = None
        self._lock = threading.Lock()

    def next_key(self) -> str:
        candidate = format_key(self._wall(), self._hr())
        with self._lock:
            if self._last is not None and candidate <= self._last:
                candidate = _bump(self._last)
            self._last = candidate
        return candidate

    __call__ = next_key
