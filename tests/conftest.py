import threading
from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from dynamodb_eventstore.services.appender import EventAppender
from dynamodb_eventstore.services.keys import SortableKeyGenerator


class FakeDynamoClient:
    """Records batch_write_item calls; optionally blocks on a gate or fails."""

    def __init__(self, error=None, response=None, gate=None):
        self.calls = []
        self.error = error
        self.response = response if response is not None else {"UnprocessedItems": {}}
        self.gate = gate

    def batch_write_item(self, **kwargs):
        self.calls.append(kwargs)
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return self.response


def client_error(code="ResourceNotFoundException"):
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, "BatchWriteItem")


FIXED_WALL_NS = int(datetime(2013, 11, 4, 1, 37, 55, tzinfo=timezone.utc).timestamp()) * 1_000_000_000 + 123_000_000


@pytest.fixture
def fixed_keys():
    return SortableKeyGenerator(wall_clock_ns=lambda: FIXED_WALL_NS, hrtime_ns=lambda: 4_567_890)


@pytest.fixture
def make_appender():
    created = []

    def _make(client, table_name="events", **kwargs):
        appender = EventAppender(table_name, client=client, **kwargs)
        created.append(appender)
        return appender

    yield _make
    for appender in created:
        appender.close(wait=True)


@pytest.fixture
def traces():
    lines = []
    lock = threading.Lock()

    def handler(message):
        with lock:
            lines.append(message)

    handler.lines = lines
    return handler
