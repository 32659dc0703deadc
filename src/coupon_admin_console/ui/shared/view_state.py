from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data_available": self.data_available,
        }


def resolve_state(*, is_loading: bool, has_data: bool, empty_message: str = "No data found") -> ViewState:
    # Load failures are not a distinct state: they surface as empty.
    if is_loading:
        return ViewState(ViewStateStatus.LOADING, "Loading...", data_available=has_data)
    if not has_data:
        return ViewState(ViewStateStatus.EMPTY, empty_message)
    return ViewState(ViewStateStatus.SUCCESS, "Ready", data_available=True)
