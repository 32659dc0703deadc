from __future__ import annotations

from dataclasses import dataclass

from ..models import DiscountRuleConfig
from .base import BaseClient


@dataclass
class RulesClient(BaseClient):
    module = "rules"

    def get(self) -> DiscountRuleConfig:
        data = self._request("GET", "/admin/config", operation="get")
        return DiscountRuleConfig.model_validate(data or {})

    def update(self, config: DiscountRuleConfig) -> None:
        self._request("PUT", "/admin/config", operation="update", json_body=config.model_dump(by_alias=True))
