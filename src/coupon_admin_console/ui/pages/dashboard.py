from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.clients.stats import StatsClient
from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import StatsResponse

from coupon_admin_console.ui.shared.formatting import format_vnd

logger = logging.getLogger(__name__)


class DashboardPage:
    """Admin overview: three counters and two daily bar charts.

    Missing or failed stats render as zeros, never as an error screen.
    """

    title = "Overview"

    def __init__(self, client: StatsClient) -> None:
        self.client = client
        self.stats = StatsResponse()
        self.is_loading = False

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.stats = self.client.get_stats()
        except (ApiError, PydanticValidationError) as exc:
            logger.warning("dashboard_load_failed", extra={"error": type(exc).__name__})
            self.stats = StatsResponse()
            return False
        finally:
            self.is_loading = False
        return True

    def summary(self) -> list[dict[str, Any]]:
        summary = self.stats.summary
        return [
            {"key": "total_revenue", "label": "Total revenue", "value": summary.total_revenue, "display": format_vnd(summary.total_revenue)},
            {"key": "total_orders", "label": "Orders", "value": summary.total_orders, "display": str(summary.total_orders)},
            {"key": "discount_given", "label": "Discount given", "value": summary.discount_given, "display": format_vnd(summary.discount_given)},
        ]

    def charts(self) -> dict[str, dict[str, Any]]:
        labels = [point.date for point in self.stats.daily]
        return {
            "revenue": {"title": "Daily revenue", "labels": labels, "values": [point.revenue for point in self.stats.daily]},
            "orders": {"title": "Daily orders", "labels": labels, "values": [point.orders for point in self.stats.daily]},
        }

    def render(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "loading": self.is_loading,
            "summary": self.summary(),
            "charts": self.charts(),
        }
