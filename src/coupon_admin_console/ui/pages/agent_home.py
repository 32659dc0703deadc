from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from coupon_admin_sdk.models import Identity

from coupon_admin_console.app.navigation import sidebar_links


@dataclass
class AgentHomePage:
    identity: Identity
    title: str = "Overview"

    def load(self) -> bool:
        return True

    def render(self) -> dict[str, Any]:
        links = [link for link in sidebar_links(self.identity.role) if link["path"] != "/agent"]
        return {
            "title": self.title,
            "greeting": f"Welcome, {self.identity.name}",
            "shortcuts": links,
        }
