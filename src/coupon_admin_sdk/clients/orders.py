from __future__ import annotations

from dataclasses import dataclass

from ..models import Order, SyncResult
from .base import BaseClient, ResourceClient


@dataclass
class AdminOrdersClient(ResourceClient[Order]):
    module = "admin_orders"
    base_path = "/admin/orders"
    model = Order


@dataclass
class AgentOrdersClient(ResourceClient[Order]):
    module = "agent_orders"
    base_path = "/agent/orders"
    model = Order


@dataclass
class StoreSyncClient(BaseClient):
    module = "store_sync"

    def sync_orders(self) -> SyncResult:
        data = self._request("POST", "/wc/sync-orders", operation="sync_orders")
        return SyncResult.model_validate(data or {})
