from __future__ import annotations
import json
from typing import Any

from ..core.exceptions import SerializationError

def encode_body(event: Any) -> str:
    try:
        return json.dumps(event, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Event is not JSON serializable: {e}") from e

def decode_body(body: str) -> Any:
    return json.loads(body)
