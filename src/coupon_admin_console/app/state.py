from __future__ import annotations

from enum import Enum

from coupon_admin_sdk.models import Role


class Route(str, Enum):
    ROOT = "/"
    LOGIN = "/login"
    CHANGE_PASSWORD = "/change-password"
    ADMIN_DASHBOARD = "/admin"
    ADMIN_AGENTS = "/admin/agents"
    ADMIN_COUPONS = "/admin/coupons"
    ADMIN_ORDERS = "/admin/orders"
    ADMIN_CONFIG = "/admin/config"
    AGENT_HOME = "/agent"
    AGENT_COUPONS = "/agent/coupons"
    AGENT_ORDERS = "/agent/orders"


class SessionPhase(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    ENDED = "ended"


def home_path(role: Role) -> Route:
    if role is Role.ADMIN:
        return Route.ADMIN_DASHBOARD
    if role is Role.AGENT:
        return Route.AGENT_HOME
    raise ValueError(f"Unsupported role: {role!r}")
