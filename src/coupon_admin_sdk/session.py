from __future__ import annotations

from dataclasses import dataclass, field

from .auth_store import AuthStore
from .clients.agents import AgentsClient
from .clients.auth import AuthClient
from .clients.coupons import AdminCouponsClient, AgentCouponsClient
from .clients.orders import AdminOrdersClient, AgentOrdersClient, StoreSyncClient
from .clients.rules import RulesClient
from .clients.stats import StatsClient
from .config import ClientConfig
from .http_client import HttpClient
from .tracing import TraceContext


@dataclass
class ApiSession:
    """Shared transport plus factories for every resource client.

    All clients share one ``HttpClient`` so the credential held by the
    ``AuthStore`` is attached to every request at send time.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = field(default=None)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore(env_name=self.config.env_name)
        self.trace = self.trace or TraceContext()
        if self.http is None:
            self.http = HttpClient(config=self.config, auth_store=self.auth_store, trace=self.trace)

    @property
    def token(self) -> str | None:
        return self.auth_store.load() if self.auth_store else None

    @property
    def trace_id(self) -> str | None:
        return self.trace.trace_id if self.trace else None

    def begin_action(self) -> str:
        """Start a new correlation id for the requests of one user action."""
        if self.trace is None:
            self.trace = TraceContext()
        return self.trace.begin()

    def _http(self) -> HttpClient:
        if self.http is None:
            raise RuntimeError("HTTP client not initialized")
        return self.http

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http())

    def agents_client(self) -> AgentsClient:
        return AgentsClient(http=self._http())

    def admin_coupons_client(self) -> AdminCouponsClient:
        return AdminCouponsClient(http=self._http())

    def agent_coupons_client(self) -> AgentCouponsClient:
        return AgentCouponsClient(http=self._http())

    def admin_orders_client(self) -> AdminOrdersClient:
        return AdminOrdersClient(http=self._http())

    def agent_orders_client(self) -> AgentOrdersClient:
        return AgentOrdersClient(http=self._http())

    def rules_client(self) -> RulesClient:
        return RulesClient(http=self._http())

    def stats_client(self) -> StatsClient:
        return StatsClient(http=self._http())

    def sync_client(self) -> StoreSyncClient:
        return StoreSyncClient(http=self._http())

    def store_token(self, token: str) -> None:
        if self.auth_store:
            self.auth_store.save(token)

    def clear(self) -> None:
        if self.auth_store:
            self.auth_store.clear()
