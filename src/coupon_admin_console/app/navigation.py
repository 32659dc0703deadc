from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from coupon_admin_sdk.models import Role

from coupon_admin_console.app.state import Route
from coupon_admin_console.telemetry import EventCategory, TelemetryLogger, build_event, disabled_telemetry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteSpec:
    route: Route
    label: str
    protected: bool = True
    required_role: Role | None = None
    redirect_to: Route | None = None


ROUTE_SPECS: tuple[RouteSpec, ...] = (
    RouteSpec(Route.LOGIN, "Login", protected=False),
    RouteSpec(Route.CHANGE_PASSWORD, "Change password"),
    RouteSpec(Route.ROOT, "Root", protected=False, redirect_to=Route.LOGIN),
    RouteSpec(Route.ADMIN_DASHBOARD, "Overview", required_role=Role.ADMIN),
    RouteSpec(Route.ADMIN_AGENTS, "Agents", required_role=Role.ADMIN),
    RouteSpec(Route.ADMIN_COUPONS, "Coupons", required_role=Role.ADMIN),
    RouteSpec(Route.ADMIN_ORDERS, "Orders", required_role=Role.ADMIN),
    RouteSpec(Route.ADMIN_CONFIG, "Config", required_role=Role.ADMIN),
    RouteSpec(Route.AGENT_HOME, "Overview", required_role=Role.AGENT),
    RouteSpec(Route.AGENT_COUPONS, "Coupons", required_role=Role.AGENT),
    RouteSpec(Route.AGENT_ORDERS, "Orders", required_role=Role.AGENT),
)

_SPECS_BY_ROUTE = {spec.route: spec for spec in ROUTE_SPECS}

SIDEBAR_ROUTES: dict[Role, tuple[Route, ...]] = {
    Role.ADMIN: (
        Route.ADMIN_DASHBOARD,
        Route.ADMIN_AGENTS,
        Route.ADMIN_COUPONS,
        Route.ADMIN_ORDERS,
        Route.ADMIN_CONFIG,
    ),
    Role.AGENT: (Route.AGENT_HOME, Route.AGENT_COUPONS, Route.AGENT_ORDERS),
}


def route_spec(route: Route) -> RouteSpec:
    return _SPECS_BY_ROUTE[route]


def resolve_path(path: str) -> Route | None:
    normalized = "/" + path.strip().strip("/")
    try:
        return Route(normalized)
    except ValueError:
        return None


def sidebar_links(role: Role) -> list[dict[str, str]]:
    return [{"path": route.value, "label": route_spec(route).label} for route in SIDEBAR_ROUTES[role]]


@dataclass
class Navigator:
    """Current route plus the page instances created for it.

    ``hard_redirect`` is the full-reload equivalent: every cached page is
    dropped so the next visit starts from fresh state.
    """

    current: Route = Route.LOGIN
    history: list[Route] = field(default_factory=list)
    pages: dict[Route, Any] = field(default_factory=dict)
    telemetry: TelemetryLogger = field(default_factory=disabled_telemetry)

    def navigate(self, route: Route) -> Route:
        spec = route_spec(route)
        if spec.redirect_to is not None:
            route = spec.redirect_to
        previous = self.current
        if route is not previous:
            self.history.append(previous)
        self.current = route
        logger.info("navigation", extra={"route": route.value})
        self.telemetry.emit(
            build_event(
                EventCategory.NAVIGATION,
                route.value,
                success=True,
                context={"from_route": previous.value, "protected": route_spec(route).protected},
            )
        )
        return route

    def hard_redirect(self, route: Route) -> Route:
        self.pages.clear()
        target = self.navigate(route)
        self.history.clear()
        return target

    def page(self, route: Route, factory: Callable[[], Any]) -> Any:
        if route not in self.pages:
            self.pages[route] = factory()
        return self.pages[route]
