from __future__ import annotations

from dataclasses import dataclass

from ..models import Agent
from .base import ResourceClient

AGENT_OPTIONS_LIMIT = 100


@dataclass
class AgentsClient(ResourceClient[Agent]):
    module = "agents"
    base_path = "/admin/agents"
    model = Agent

    def options(self, limit: int = AGENT_OPTIONS_LIMIT) -> list[Agent]:
        """Agents for filter and owner selectors (first ``limit`` only)."""
        return self.list({"limit": limit}).data
