from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from time import perf_counter
from typing import Any, Mapping

from coupon_admin_sdk.exceptions import ApiError


class EventCategory(str, Enum):
    AUTH = "auth"
    NAVIGATION = "navigation"
    API_CALL = "api_call_result"
    ERROR = "error"


# Agents and customers are identified by phone and name; neither may leave the console.
PII_CONTEXT_KEYS = frozenset(
    {
        "phone",
        "password",
        "oldpassword",
        "newpassword",
        "token",
        "authorization",
        "name",
        "customername",
        "email",
        "search",
    }
)


def _normalize_key(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


def check_context(context: Mapping[str, Any] | None) -> dict[str, Any]:
    """Copy of ``context`` with scalar values only; PII-like keys raise ``ValueError``."""
    if not context:
        return {}
    illegal = sorted(key for key in context if _normalize_key(key) in PII_CONTEXT_KEYS)
    if illegal:
        raise ValueError(f"PII-like keys are forbidden in telemetry context: {illegal}")
    checked: dict[str, Any] = {}
    for key, value in context.items():
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, (str, int, float, bool)) and value is not None:
            raise ValueError(f"Telemetry context value for {key!r} must be a scalar")
        checked[key] = value
    return checked


@dataclass(frozen=True)
class TelemetryEvent:
    category: EventCategory
    action: str
    timestamp_utc: str
    trace_id: str | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "category": self.category.value,
            "action": self.action,
            "timestamp_utc": self.timestamp_utc,
        }
        for key in ("trace_id", "duration_ms", "success", "error_code"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def build_event(
    category: EventCategory | str,
    action: str,
    *,
    trace_id: str | None = None,
    started: float | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    """``started`` is a ``perf_counter()`` reading taken when the action began."""
    try:
        resolved = EventCategory(category)
    except ValueError:
        raise ValueError(f"Unsupported telemetry category: {category}") from None
    return TelemetryEvent(
        category=resolved,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        trace_id=trace_id,
        duration_ms=int((perf_counter() - started) * 1000) if started is not None else None,
        success=success,
        error_code=error_code,
        context=check_context(context),
    )


def result_event(
    action: str,
    *,
    started: float,
    category: EventCategory = EventCategory.API_CALL,
    trace_id: str | None = None,
    error: Exception | None = None,
    context: Mapping[str, Any] | None = None,
) -> TelemetryEvent:
    """Outcome of one console operation backed by an API call.

    API failures contribute their code, HTTP status and trace id; any other
    error is reported as an unreadable payload.
    """
    details = dict(context or {})
    error_code: str | None = None
    if isinstance(error, ApiError):
        error_code = error.code
        details["status_code"] = error.status_code
        trace_id = error.trace_id or trace_id
    elif error is not None:
        error_code = "invalid_payload"
    return build_event(
        category,
        action,
        trace_id=trace_id,
        started=started,
        success=error is None,
        error_code=error_code,
        context=details,
    )
