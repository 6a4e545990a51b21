"""
Lightweight event sink → JSONL (default: ./data/logs/events.jsonl)
"""
from __future__ import annotations
from pathlib import Path
import json
import threading
import time
from typing import Any, Dict

from .trace import Subscription, TraceBus

LOG_FILE = Path.cwd() / "data" / "logs" / "events.jsonl"

_write_lock = threading.Lock()

def record_event(kind: str, payload: Dict[str, Any], path: Path | str | None = None) -> None:
    target = Path(path) if path else LOG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    rec = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()),
        "kind": kind,
        "payload": payload,
    }
    with _write_lock, target.open("a", encoding="utf-8") as f:
        f.write(json.dumps(rec, ensure_ascii=False) + "\n")

class JsonlTraceSink:
    """Subscribes to a TraceBus and mirrors every trace line into events.jsonl."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else LOG_FILE
        self._sub: Subscription | None = None

    def __call__(self, message: str) -> None:
        tag, _, rest = message.partition(" ")
        record_event("trace", {"tag": tag, "message": message, "key": rest.split(" ", 1)[0]}, self.path)

    def attach(self, bus: TraceBus) -> Subscription:
        self._sub = bus.subscribe(self)
        return self._sub

    def detach(self) -> None:
        if self._sub is not None:
            self._sub.unsubscribe()
            self._sub = None
