from __future__ import annotations

from dataclasses import dataclass

from ..models import StatsResponse
from .base import BaseClient


@dataclass
class StatsClient(BaseClient):
    module = "stats"

    def get_stats(self) -> StatsResponse:
        data = self._request("GET", "/admin/stats", operation="get_stats")
        return StatsResponse.model_validate(data or {})
