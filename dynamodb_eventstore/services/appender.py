"""
EventAppender: append JSON events to one DynamoDB table under sortable keys.

put() derives the key, encodes the body and hands a one-item BatchWriteItem to
a worker; it returns a PendingPut straight away. The outcome reaches the
caller through the optional callback, the trace channel and the PendingPut.
"""
from __future__ import annotations
import asyncio
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..core.config import Settings
from ..core.exceptions import AppenderClosedError, ConfigurationError, StoreWriteError
from ..core.logger import get_logger
from ..obs.events import JsonlTraceSink
from ..obs.trace import Subscription, TraceBus, TraceHandler
from .codec import encode_body
from .keys import SortableKeyGenerator
from .store_client import ClientFactory, StoreOptions, build_dynamodb_client

log = get_logger("appender")

PutCallback = Callable[..., None]

@dataclass(frozen=True)
class StoredRecord:
    key: str
    body: str

    def to_item(self) -> Dict[str, Dict[str, str]]:
        return {"key": {"S": self.key}, "body": {"S": self.body}}

class PendingPut:
    """A submitted write. result() returns the key or raises StoreWriteError."""

    def __init__(self, record: StoredRecord, future: Future) -> None:
        self.record = record
        self._future = future

    @property
    def key(self) -> str:
        return self.record.key

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> str:
        return self._future.result(timeout)

    def exception(self, timeout: float | None = None) -> BaseException | None:
        return self._future.exception(timeout)

    def add_done_callback(self, fn: Callable[["PendingPut"], None]) -> None:
        self._future.add_done_callback(lambda _f: fn(self))

    async def wait(self) -> str:
        return await asyncio.wrap_future(self._future)

class EventAppender:
    def __init__(
        self,
        table_name: str | None = None,
        *,
        client: Any = None,
        client_factory: ClientFactory = build_dynamodb_client,
        region: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        ssl_enabled: bool = True,
        endpoint_url: str | None = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        executor: Executor | None = None,
        max_workers: int = 4,
        key_generator: SortableKeyGenerator | None = None,
        trace: TraceBus | None = None,
    ) -> None:
        self.table_name = table_name
        self.options = StoreOptions(
            region=region,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            ssl_enabled=ssl_enabled,
            endpoint_url=endpoint_url,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )
        self.client = client if client is not None else client_factory(self.options)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="eventstore-put"
        )
        self.keys = key_generator or SortableKeyGenerator()
        self.trace = trace or TraceBus()
        self._closed = False

    @classmethod
    def from_settings(cls, s: Settings, **overrides: Any) -> "EventAppender":
        kwargs: Dict[str, Any] = dict(
            table_name=s.table_name,
            region=s.region,
            access_key_id=s.access_key_id,
            secret_access_key=s.secret_access_key,
            ssl_enabled=s.ssl_enabled,
            endpoint_url=s.endpoint_url,
            connect_timeout=s.connect_timeout,
            read_timeout=s.read_timeout,
            max_workers=s.max_workers,
        )
        kwargs.update(overrides)
        appender = cls(**kwargs)
        if s.trace_to_events_log:
            JsonlTraceSink(s.events_log_path).attach(appender.trace)
        return appender

    def subscribe(self, handler: TraceHandler) -> Subscription:
        return self.trace.subscribe(handler)

    def put(self, event: Any, callback: Optional[PutCallback] = None) -> PendingPut:
        if self._closed:
            raise AppenderClosedError("put() called on a closed appender")
        if not self.table_name:
            raise ConfigurationError("table_name is required to put events")
        key = self.keys.next_key()
        body = encode_body(event)
        record = StoredRecord(key=key, body=body)

        self.trace.emit(f"put {key} {body}")
        log.debug("Submitting %s to %s", key, self.table_name)
        future = self._executor.submit(self._write, record, callback)
        return PendingPut(record, future)

    def request_items(self, record: StoredRecord) -> Dict[str, List[Dict[str, Any]]]:
        return {self.table_name: [{"PutRequest": {"Item": record.to_item()}}]}

    def _submit(self, record: StoredRecord) -> None:
        try:
            response = self.client.batch_write_item(RequestItems=self.request_items(record))
        except Exception as e:
            raise StoreWriteError(
                f"Write of {record.key} to {self.table_name} failed: {e}",
                key=record.key, table_name=self.table_name,
            ) from e
        unprocessed = (response or {}).get("UnprocessedItems") or {}
        if unprocessed.get(self.table_name):
            raise StoreWriteError(
                f"Write of {record.key} to {self.table_name} was not processed",
                key=record.key, table_name=self.table_name,
            )

    def _write(self, record: StoredRecord, callback: Optional[PutCallback]) -> str:
        try:
            self._submit(record)
        except StoreWriteError as e:
            log.warning("%s", e, exc_info=e.__cause__ is not None)
            self.trace.emit(f"error {record.key}")
            if callback:
                callback(e)
            raise
        self.trace.emit(f"ok {record.key}")
        if callback:
            callback()
        return record.key

    def close(self, wait: bool = True) -> None:
        self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "EventAppender":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
