"""
Application-specific exceptions to keep error handling consistent.
"""
from __future__ import annotations


class AppError(Exception):
    """Base app error."""
    pass

class ConfigurationError(AppError):
    """Raised when the appender is missing options it needs (e.g. table name)."""
    pass

class SerializationError(AppError):
    """Raised when an event cannot be encoded as a JSON body."""
    pass

class StoreWriteError(AppError):
    """Raised (or handed to callbacks) when the store rejects or fails a write."""

    def __init__(self, message: str, *, key: str | None = None, table_name: str | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.table_name = table_name

class AppenderClosedError(AppError):
    """Raised when put() is called on an appender that has been closed."""
    pass
