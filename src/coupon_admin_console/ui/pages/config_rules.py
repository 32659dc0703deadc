from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.clients.rules import RulesClient
from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import DiscountRuleConfig
from coupon_admin_sdk.ui_errors import user_message

from coupon_admin_console.ui.shared.notification_center import NotificationCenter

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("minDiscountPercent", "maxDiscountPercent", "minDiscountFixed", "maxDiscountFixed")


class ConfigRulesPage:
    """Edit form for the singleton discount-rule configuration."""

    title = "Coupon rule configuration"

    def __init__(self, client: RulesClient, *, notifications: NotificationCenter | None = None) -> None:
        self.client = client
        self.notifications = notifications or NotificationCenter()
        self.config = DiscountRuleConfig()
        self.draft: dict[str, Any] = self.config.model_dump(by_alias=True)
        self.is_loading = False
        self.saving = False

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.config = self.client.get()
        except (ApiError, PydanticValidationError) as exc:
            logger.warning("config_rules_load_failed", extra={"error": type(exc).__name__})
            return False
        finally:
            self.is_loading = False
        self.draft = self.config.model_dump(by_alias=True)
        return True

    def update(self, **changes: Any) -> dict[str, Any]:
        for name, value in changes.items():
            if name not in self.draft:
                raise KeyError(name)
            self.draft[name] = value
        return self.draft

    def validate(self) -> str | None:
        try:
            values = {name: float(self.draft[name]) for name in _NUMERIC_FIELDS}
        except (TypeError, ValueError):
            return "Rule values must be numbers"
        if not bool(self.draft.get("applyRules")):
            return None
        if not 0 <= values["minDiscountPercent"] <= values["maxDiscountPercent"] <= 100:
            return "Percent bounds must satisfy 0 <= minimum <= maximum <= 100"
        if not 0 <= values["minDiscountFixed"] <= values["maxDiscountFixed"]:
            return "Fixed amount minimum must not exceed the maximum"
        return None

    def save(self) -> bool:
        if self.saving:
            return False
        problem = self.validate()
        if problem:
            self.notifications.blocking_error(problem, title="Invalid configuration")
            return False
        config = DiscountRuleConfig.model_validate(self.draft)
        self.saving = True
        try:
            self.client.update(config)
        except ApiError as exc:
            logger.info("config_rules_save_failed", extra={"status_code": exc.status_code})
            self.notifications.error(user_message(exc, "Failed to update configuration"), trace_id=exc.trace_id)
            return False
        finally:
            self.saving = False
        self.config = config
        self.notifications.success("Configuration updated successfully")
        return True

    def render(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "loading": self.is_loading,
            "draft": dict(self.draft),
            # Bounds are greyed out while enforcement is off.
            "bounds_enabled": bool(self.draft.get("applyRules")),
            "notifications": self.notifications.render(),
        }
