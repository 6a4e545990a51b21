from dynamodb_eventstore.core.config import Settings
from dynamodb_eventstore.services.store_client import StoreOptions


def test_defaults(monkeypatch):
    monkeypatch.delenv("EVENTSTORE_SSL_ENABLED", raising=False)
    monkeypatch.delenv("EVENTSTORE_TABLE_NAME", raising=False)
    s = Settings(_env_file=None)
    assert s.ssl_enabled is True
    assert s.table_name is None
    assert s.max_workers == 4


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EVENTSTORE_TABLE_NAME", "audit-events")
    monkeypatch.setenv("EVENTSTORE_REGION", "eu-central-1")
    monkeypatch.setenv("EVENTSTORE_SSL_ENABLED", "false")
    s = Settings(_env_file=None)
    assert s.table_name == "audit-events"
    assert s.ssl_enabled is False

    opts = StoreOptions.from_settings(s)
    assert opts.region == "eu-central-1"
    assert opts.ssl_enabled is False
