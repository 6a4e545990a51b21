from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..core.config import settings
from ..core.exceptions import ConfigurationError, SerializationError, StoreWriteError
from ..core.logger import get_logger
from ..obs.events import record_event
from ..obs.middleware import RequestLoggingMiddleware
from ..services.appender import EventAppender

log = get_logger("api")

@lru_cache(maxsize=1)
def _build_appender() -> EventAppender:
    return EventAppender.from_settings(settings)

def get_appender() -> EventAppender:
    try:
        return _build_appender()
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _build_appender.cache_info().currsize:
        _build_appender().close(wait=True)

app = FastAPI(title="DynamoDB Event Store", version="0.1.0", lifespan=lifespan)

# Request logging middleware (observability)
app.add_middleware(RequestLoggingMiddleware)

# Global exception handler → log to events.jsonl
@app.exception_handler(Exception)
async def unhandled_exc(request: Request, exc: Exception):
    log.exception("Unhandled error on %s", request.url.path)
    record_event("error", {"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=500, content={"detail": "internal_error"})

# ----------------- Models -----------------
class PutResponse(BaseModel):
    key: str
    table: str
    status: str = "accepted"  # accepted | ok

# ----------------- Endpoints -----------------
@app.get("/health")
async def health():
    return {"ok": True, "env": settings.app_env, "table": settings.table_name}

@app.post("/events", status_code=202, response_model=PutResponse)
async def put_event(
    event: Any = Body(...),
    wait: bool = False,
    appender: EventAppender = Depends(get_appender),
):
    try:
        pending = appender.put(event)
    except SerializationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))

    record_event("put", {"key": pending.key, "table": appender.table_name})
    if not wait:
        return PutResponse(key=pending.key, table=appender.table_name)

    try:
        await pending.wait()
    except StoreWriteError as e:
        record_event("error", {"key": pending.key, "error": str(e)})
        raise HTTPException(status_code=502, detail="store_write_failed")
    return PutResponse(key=pending.key, table=appender.table_name, status="ok")
