# dynamodb_eventstore/core/config.py
from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EVENTSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "dev"

    # Target table (required before put() can be called)
    table_name: str | None = None

    # Connection
    region: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    ssl_enabled: bool = True
    endpoint_url: str | None = None  # DynamoDB Local / LocalStack
    connect_timeout: float = 5.0
    read_timeout: float = 10.0

    # Worker pool for in-flight writes
    max_workers: int = 4

    # Mirror trace lines into events.jsonl
    events_log_path: str | None = None
    trace_to_events_log: bool = False

settings = Settings()
