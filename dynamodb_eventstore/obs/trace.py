"""
Trace channel: free-form diagnostic strings fanned out to subscribers.
"""
from __future__ import annotations
import threading
from typing import Callable, List

from ..core.logger import get_logger

log = get_logger("trace")

TraceHandler = Callable[[str], None]

class Subscription:
    """Handle returned by TraceBus.subscribe(); unsubscribe() is idempotent."""

    def __init__(self, bus: "TraceBus", handler: TraceHandler) -> None:
        self._bus = bus
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._bus._remove(self)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.unsubscribe()

class TraceBus:
    def __init__(self) -> None:
        self._subs: List[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: TraceHandler) -> Subscription:
        sub = Subscription(self, handler)
        with self._lock:
            self._subs.append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subs:
                self._subs.remove(sub)

    def emit(self, message: str) -> None:
        # snapshot so handlers may unsubscribe while being called
        with self._lock:
            subs = list(self._subs)
        for sub in subs:
            try:
                sub.handler(message)
            except Exception:
                log.exception("Trace handler %r failed", sub.handler)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subs)
