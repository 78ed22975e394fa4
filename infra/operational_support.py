from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Iterator

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("taskflow_trace_id", default=None)


def create_trace_id(prefix: str = "rpt") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = _TRACE_ID_CTX.get()
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Bind a trace id for the duration of one report run; a blank id gets a fresh one."""
    normalized = (trace_id or "").strip() or create_trace_id()
    token = _TRACE_ID_CTX.set(normalized)
    try:
        yield normalized
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


__all__ = [
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
]
