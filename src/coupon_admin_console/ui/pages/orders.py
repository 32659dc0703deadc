from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import Agent, Order, SyncResult
from coupon_admin_sdk.ui_errors import user_message

from coupon_admin_console.ui.pages.agent_options import AgentOptionsSource, agent_options_payload, load_agent_options
from coupon_admin_console.ui.resources.paginated_resource import ResourceEndpoint, ResourceListPage
from coupon_admin_console.ui.resources.pagination import ALL_FILTER
from coupon_admin_console.ui.shared.formatting import agent_label, coupon_label, format_datetime, format_vnd, status_badge

logger = logging.getLogger(__name__)

SYNC_FAILED_MESSAGE = "Store sync failed"


class SyncSource(Protocol):
    def sync_orders(self) -> SyncResult: ...


class OrdersPageBase(ResourceListPage[Order]):
    editable = False
    columns = (
        ("order", "Order"),
        ("customer", "Customer"),
        ("coupon", "Coupon"),
        ("total", "Total"),
        ("discount", "Discount"),
        ("status", "Status"),
        ("date", "Date"),
    )
    empty_message = "No orders yet"

    def row(self, item: Order) -> dict[str, Any]:
        badge = status_badge(item.status)
        return {
            "id": item.id,
            "order": f"#{item.wc_order_id}",
            "customer": item.customer_name,
            "coupon": coupon_label(item.coupon_code_used),
            "total": format_vnd(item.total),
            "discount": format_vnd(item.discount_total),
            "status": badge["label"],
            "status_tone": badge["tone"],
            "date": format_datetime(item.date_created),
        }


class AdminOrdersPage(OrdersPageBase):
    """All synced orders, filterable by agent, with a manual store sync."""

    module = "admin_orders"
    title = "Orders"
    filter_param = "agentId"
    default_filter = ALL_FILTER
    columns = OrdersPageBase.columns[:3] + (("agent", "Agent"),) + OrdersPageBase.columns[3:]

    def __init__(
        self,
        endpoint: ResourceEndpoint[Order],
        *,
        sync: SyncSource | None = None,
        agents: AgentOptionsSource | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(endpoint, **kwargs)
        self.sync_source = sync
        self.agents_source = agents
        self.agent_options: list[Agent] = []
        self.syncing = False

    def load(self) -> bool:
        self.agent_options = load_agent_options(self.agents_source, self.module)
        return super().load()

    def sync(self) -> bool:
        if self.syncing or self.sync_source is None:
            return False
        self.syncing = True
        logger.info("store_sync_started")
        try:
            result = self.sync_source.sync_orders()
        except ApiError as exc:
            logger.warning("store_sync_failed", extra={"status_code": exc.status_code, "trace_id": exc.trace_id})
            self.notifications.error(user_message(exc, SYNC_FAILED_MESSAGE), title="Sync failed", trace_id=exc.trace_id)
            return False
        except PydanticValidationError as exc:
            logger.warning("store_sync_invalid_result", extra={"errors": exc.error_count()})
            self.notifications.error(SYNC_FAILED_MESSAGE, title="Sync failed")
            return False
        finally:
            self.syncing = False
        logger.info("store_sync_completed", extra={"imported": result.imported})
        self.notifications.success(
            f"Sync complete: {result.imported} orders imported or updated",
            title="Sync complete",
        )
        self.load()
        return True

    def row(self, item: Order) -> dict[str, Any]:
        return {**super().row(item), "agent": agent_label(item.agent)}

    def render(self) -> dict[str, Any]:
        payload = super().render()
        payload["filter_options"] = agent_options_payload(self.agent_options, include_all=True)
        payload["syncing"] = self.syncing
        return payload


class AgentOrdersPage(OrdersPageBase):
    module = "agent_orders"
    title = "My orders"
