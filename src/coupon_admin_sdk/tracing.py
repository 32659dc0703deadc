from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Trace-ID"
# Looked up case-insensitively; the API gateway echoes X-Request-ID.
_ECHOED_HEADERS = ("x-trace-id", "x-request-id")
_PAYLOAD_KEYS = ("trace_id", "traceId")


def new_trace_id() -> str:
    return uuid.uuid4().hex


@dataclass
class TraceContext:
    """Correlation id for the requests of one user action.

    The console calls ``begin`` when the user triggers an action (a page
    load, a save, a logout); every request sent until the next ``begin``
    carries the same id, and the id echoed back by the API replaces it.
    """

    trace_id: str | None = None
    actions: int = 0

    def begin(self) -> str:
        self.trace_id = new_trace_id()
        self.actions += 1
        return self.trace_id

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = new_trace_id()
        return self.trace_id

    def adopt(self, headers: Mapping[str, str], payload: Mapping[str, object] | None = None) -> str | None:
        echoed = _from_payload(payload) or _from_headers(headers)
        if echoed:
            self.trace_id = echoed
        return self.trace_id


def _from_headers(headers: Mapping[str, str]) -> str | None:
    lowered = {str(key).lower(): value for key, value in headers.items()}
    for key in _ECHOED_HEADERS:
        value = lowered.get(key)
        if value:
            return value
    return None


def _from_payload(payload: Mapping[str, object] | None) -> str | None:
    if not payload:
        return None
    for key in _PAYLOAD_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None
