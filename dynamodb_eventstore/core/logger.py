"""
Named loggers with a single stream handler each.
"""
from __future__ import annotations
import logging
import os

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def get_logger(name: str) -> logging.Logger:
    log = logging.getLogger(f"eventstore.{name}")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
        log.setLevel(os.getenv("EVENTSTORE_LOG_LEVEL", "INFO").upper())
    return log
