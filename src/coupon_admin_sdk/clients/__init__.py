from .agents import AgentsClient
from .auth import AuthClient
from .base import BaseClient, ResourceClient
from .coupons import AdminCouponsClient, AgentCouponsClient
from .orders import AdminOrdersClient, AgentOrdersClient, StoreSyncClient
from .rules import RulesClient
from .stats import StatsClient

__all__ = [
    "AdminCouponsClient",
    "AdminOrdersClient",
    "AgentCouponsClient",
    "AgentOrdersClient",
    "AgentsClient",
    "AuthClient",
    "BaseClient",
    "ResourceClient",
    "RulesClient",
    "StatsClient",
    "StoreSyncClient",
]
