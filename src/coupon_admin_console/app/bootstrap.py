from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from coupon_admin_sdk import ApiSession, ClientConfig, load_config

from coupon_admin_console.app.navigation import Navigator, route_spec, sidebar_links
from coupon_admin_console.app.route_guard import RENDER, GuardDecision, GuardKind, evaluate_guard
from coupon_admin_console.app.session_store import SessionStore
from coupon_admin_console.app.state import Route, home_path
from coupon_admin_console.telemetry import TelemetryLogger
from coupon_admin_console.ui.pages import (
    AdminCouponsPage,
    AdminOrdersPage,
    AgentCouponsPage,
    AgentHomePage,
    AgentOrdersPage,
    AgentsPage,
    ChangePasswordPage,
    ConfigRulesPage,
    DashboardPage,
    LoginPage,
)
from coupon_admin_console.ui.resources.paginated_resource import ConfirmFn

logger = logging.getLogger(__name__)


@dataclass
class ResolvedView:
    route: Route
    decision: GuardDecision
    page: Any | None = None

    @property
    def loading(self) -> bool:
        return self.decision.kind is GuardKind.LOADING


class ConsoleApp:
    """Composition root: one session, one store, one navigator per process."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        *,
        confirm: ConfirmFn | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.config = config or load_config()
        self.session = session or ApiSession(self.config)
        self.telemetry = telemetry or TelemetryLogger(app_name="coupon_console", enabled=self.config.telemetry_enabled)
        self.navigator = Navigator(telemetry=self.telemetry)
        self.store = SessionStore(self.session, self.navigator, self.telemetry)
        self.confirm = confirm
        self._factories: dict[Route, Callable[[], Any]] = {
            Route.LOGIN: lambda: LoginPage(self.store, self.navigator, self.telemetry),
            Route.CHANGE_PASSWORD: lambda: ChangePasswordPage(self.store, self.navigator),
            Route.ADMIN_DASHBOARD: lambda: DashboardPage(self.session.stats_client()),
            Route.ADMIN_AGENTS: lambda: AgentsPage(self.session.agents_client(), **self._list_options()),
            Route.ADMIN_COUPONS: lambda: AdminCouponsPage(
                self.session.admin_coupons_client(),
                agents=self.session.agents_client(),
                rules=self.session.rules_client(),
                **self._list_options(),
            ),
            Route.ADMIN_ORDERS: lambda: AdminOrdersPage(
                self.session.admin_orders_client(),
                sync=self.session.sync_client(),
                agents=self.session.agents_client(),
                **self._list_options(),
            ),
            Route.ADMIN_CONFIG: lambda: ConfigRulesPage(self.session.rules_client()),
            Route.AGENT_HOME: self._agent_home,
            Route.AGENT_COUPONS: lambda: AgentCouponsPage(
                self.session.agent_coupons_client(),
                rules=self.session.rules_client(),
                **self._list_options(),
            ),
            Route.AGENT_ORDERS: lambda: AgentOrdersPage(self.session.agent_orders_client(), **self._list_options()),
        }

    def start(self) -> ResolvedView:
        self.store.start()
        identity = self.store.identity
        if identity is None:
            self.navigator.navigate(Route.LOGIN)
        elif identity.is_first_login:
            self.navigator.navigate(Route.CHANGE_PASSWORD)
        else:
            self.navigator.navigate(home_path(identity.role))
        return self.resolve()

    def go(self, route: Route) -> ResolvedView:
        self.navigator.navigate(route)
        return self.resolve()

    def logout(self) -> ResolvedView:
        self.store.end_session()
        return self.resolve()

    def resolve(self) -> ResolvedView:
        """Apply the guard to the current route, following redirects."""
        for _ in range(len(Route)):
            route = self.navigator.current
            spec = route_spec(route)
            if not spec.protected:
                return ResolvedView(route, RENDER, self._page(route))
            decision = evaluate_guard(self.store.identity, self.store.loading, spec.required_role, route)
            if decision.is_redirect and decision.target is not None:
                logger.info("guard_redirect", extra={"route": route.value, "target": decision.target.value})
                self.navigator.navigate(decision.target)
                continue
            if decision.kind is GuardKind.LOADING:
                return ResolvedView(route, decision)
            return ResolvedView(route, decision, self._page(route))
        raise RuntimeError(f"Redirect loop while resolving {self.navigator.current.value}")

    def sidebar(self) -> list[dict[str, str]]:
        identity = self.store.identity
        if identity is None or identity.is_first_login:
            return []
        return sidebar_links(identity.role)

    def _page(self, route: Route) -> Any:
        def mount() -> Any:
            page = self._factories[route]()
            load = getattr(page, "load", None)
            if callable(load):
                load()
            return page

        return self.navigator.page(route, mount)

    def _list_options(self) -> dict[str, Any]:
        return {
            "confirm": self.confirm,
            "page_size": self.config.default_page_size,
            "telemetry": self.telemetry,
            "trace": self.session.trace,
        }

    def _agent_home(self) -> AgentHomePage:
        identity = self.store.identity
        if identity is None:
            raise RuntimeError("Agent home requires a signed-in identity")
        return AgentHomePage(identity)
