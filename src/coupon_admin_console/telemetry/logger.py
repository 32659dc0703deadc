from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from .events import TelemetryEvent


class TelemetryLogger:
    """Appends events as JSON lines; a no-op unless enabled."""

    def __init__(
        self,
        *,
        app_name: str = "coupon_console",
        enabled: bool = False,
        log_file: str | Path | None = None,
        stdout_stream: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = enabled
        self.log_file = Path(log_file) if log_file else Path("artifacts") / "telemetry" / f"{app_name}.jsonl"
        self.stdout_stream = stdout_stream

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False

        payload = event.to_dict()
        payload["app_name"] = self.app_name
        line = json.dumps(payload, sort_keys=True)

        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as fp:
            fp.write(f"{line}\n")

        if self.stdout_stream is not None:
            self.stdout_stream.write(f"{line}\n")
            self.stdout_stream.flush()
        return True


def disabled_telemetry() -> TelemetryLogger:
    return TelemetryLogger(enabled=False)
