from __future__ import annotations

import logging
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import Agent

from coupon_admin_console.ui.resources.pagination import ALL_FILTER

logger = logging.getLogger(__name__)


class AgentOptionsSource(Protocol):
    def options(self, limit: int = ...) -> list[Agent]: ...


def load_agent_options(source: AgentOptionsSource | None, module: str) -> list[Agent]:
    """Agents for selectors; a failed fetch leaves the selector empty."""
    if source is None:
        return []
    try:
        return source.options()
    except (ApiError, PydanticValidationError) as exc:
        logger.warning("agent_options_load_failed", extra={"resource": module, "error": type(exc).__name__})
        return []


def agent_options_payload(agents: list[Agent], *, include_all: bool) -> list[dict[str, str]]:
    options = [{"value": ALL_FILTER, "label": "All agents"}] if include_all else []
    options.extend({"value": agent.id, "label": agent.name} for agent in agents)
    return options
