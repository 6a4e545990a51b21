"""
DynamoDB client construction. Building a client does not touch the network.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable

import boto3
from botocore.config import Config
from botocore.exceptions import NoRegionError

from ..core.config import Settings
from ..core.exceptions import ConfigurationError

@dataclass(frozen=True)
class StoreOptions:
    region: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    ssl_enabled: bool = True
    endpoint_url: str | None = None
    connect_timeout: float = 5.0
    read_timeout: float = 10.0

    @classmethod
    def from_settings(cls, s: Settings) -> "StoreOptions":
        return cls(
            region=s.region,
            access_key_id=s.access_key_id,
            secret_access_key=s.secret_access_key,
            ssl_enabled=s.ssl_enabled,
            endpoint_url=s.endpoint_url,
            connect_timeout=s.connect_timeout,
            read_timeout=s.read_timeout,
        )

ClientFactory = Callable[[StoreOptions], Any]

def build_dynamodb_client(options: StoreOptions) -> Any:
    session = boto3.session.Session(
        aws_access_key_id=options.access_key_id,
        aws_secret_access_key=options.secret_access_key,
        region_name=options.region,
    )
    config = Config(
        connect_timeout=options.connect_timeout,
        read_timeout=options.read_timeout,
        retries={"max_attempts": 0},  # one attempt per put
    )
    try:
        return session.client(
            "dynamodb",
            use_ssl=options.ssl_enabled,
            endpoint_url=options.endpoint_url,
            config=config,
        )
    except NoRegionError as e:
        raise ConfigurationError("No region configured for the DynamoDB client") from e
