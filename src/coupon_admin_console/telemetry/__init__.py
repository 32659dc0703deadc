from .events import EventCategory, TelemetryEvent, build_event, check_context, result_event
from .logger import TelemetryLogger, disabled_telemetry

__all__ = [
    "EventCategory",
    "TelemetryEvent",
    "TelemetryLogger",
    "build_event",
    "check_context",
    "disabled_telemetry",
    "result_event",
]
