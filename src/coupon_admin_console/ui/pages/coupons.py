from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import Agent, Coupon, CouponPayload, DiscountRuleConfig, DiscountType

from coupon_admin_console.ui.pages.agent_options import AgentOptionsSource, agent_options_payload, load_agent_options
from coupon_admin_console.ui.resources.paginated_resource import ResourceEndpoint, ResourceListPage
from coupon_admin_console.ui.resources.pagination import ALL_FILTER
from coupon_admin_console.ui.shared.formatting import (
    agent_label,
    discount_type_label,
    format_date,
    format_discount,
    format_number,
    format_vnd,
)

logger = logging.getLogger(__name__)


def rule_guidance(rules: DiscountRuleConfig | None, discount_type: DiscountType | str) -> str | None:
    if rules is None or not rules.apply_rules:
        return None
    low, high = rules.bounds_for(DiscountType(discount_type))
    if DiscountType(discount_type) is DiscountType.PERCENT:
        return f"Allowed discount: {format_number(low)}% to {format_number(high)}%"
    return f"Allowed discount: {format_vnd(low)} to {format_vnd(high)}"


class CouponsPageBase(ResourceListPage[Coupon]):
    """Shared coupon form: the code is upper-cased and locked once created."""

    columns = (
        ("code", "Code"),
        ("discount_type", "Type"),
        ("discount", "Discount"),
        ("created", "Created"),
    )
    empty_message = "No coupons yet"
    created_message = "Coupon created and synced to the store"
    updated_message = "Coupon updated successfully"
    deleted_message = "Coupon deleted successfully"
    save_failed_message = "Operation failed"
    delete_failed_message = "Delete failed"
    delete_confirm_message = "Are you sure you want to delete this coupon?"

    def __init__(
        self,
        endpoint: ResourceEndpoint[Coupon],
        *,
        rules: RulesSource | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(endpoint, **kwargs)
        self.rules_source = rules
        self.rules: DiscountRuleConfig | None = None
        self._rules_loaded = False

    def load(self) -> bool:
        if not self._rules_loaded:
            self._rules_loaded = True
            self.rules = self._load_rules()
        return super().load()

    def _load_rules(self) -> DiscountRuleConfig | None:
        if self.rules_source is None:
            return None
        try:
            return self.rules_source.get()
        except (ApiError, PydanticValidationError) as exc:
            # Agents cannot read the rule config; guidance is simply omitted.
            logger.info("coupon_rules_unavailable", extra={"resource": self.module, "error": type(exc).__name__})
            return None

    def blank_draft(self) -> dict[str, Any]:
        return {"code": "", "discountType": DiscountType.PERCENT.value, "discountValue": 0}

    def draft_from(self, item: Coupon) -> dict[str, Any]:
        return {
            "code": item.code,
            "discountType": DiscountType(item.discount_type).value,
            "discountValue": item.discount_value,
        }

    def normalize_field(self, name: str, value: Any) -> Any:
        if name == "code":
            return str(value).upper()
        if name == "discountType":
            return DiscountType(value).value
        return value

    def read_only_fields(self) -> set[str]:
        return {"code"} if self.dialog.is_editing else set()

    def validate(self, draft: Mapping[str, Any]) -> str | None:
        if not str(draft.get("code") or "").strip():
            return "Please enter a coupon code"
        try:
            float(draft.get("discountValue"))
        except (TypeError, ValueError):
            return "Discount value must be a number"
        return None

    def payload(self, draft: Mapping[str, Any]) -> dict[str, Any]:
        coupon = CouponPayload(
            code=str(draft["code"]).strip().upper(),
            discount_type=DiscountType(draft["discountType"]),
            discount_value=float(draft["discountValue"]),
            agent_id=draft.get("agentId") or None,
        )
        return coupon.model_dump(mode="json", by_alias=True, exclude_none=True)

    def dialog_hints(self) -> dict[str, Any]:
        discount_type = self.dialog.draft.get("discountType", DiscountType.PERCENT.value)
        return {
            "code_read_only": self.dialog.is_editing,
            "rules": rule_guidance(self.rules, discount_type),
        }

    def row(self, item: Coupon) -> dict[str, Any]:
        return {
            "id": item.id,
            "code": item.code,
            "discount_type": discount_type_label(item.discount_type),
            "discount": format_discount(item.discount_type, item.discount_value),
            "created": format_date(item.created_at),
        }


class AdminCouponsPage(CouponsPageBase):
    module = "admin_coupons"
    title = "Coupon management"
    filter_param = "agentId"
    default_filter = ALL_FILTER
    columns = (
        ("code", "Code"),
        ("discount_type", "Type"),
        ("discount", "Discount"),
        ("agent", "Agent"),
        ("created", "Created"),
    )
    delete_confirm_message = "Are you sure you want to delete this coupon? It will also be removed from the storefront."

    def __init__(
        self,
        endpoint: ResourceEndpoint[Coupon],
        *,
        agents: AgentOptionsSource | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(endpoint, **kwargs)
        self.agents_source = agents
        self.agent_options: list[Agent] = []

    def load(self) -> bool:
        self.agent_options = load_agent_options(self.agents_source, self.module)
        return super().load()

    def blank_draft(self) -> dict[str, Any]:
        return {**super().blank_draft(), "agentId": ""}

    def draft_from(self, item: Coupon) -> dict[str, Any]:
        return {**super().draft_from(item), "agentId": item.agent.id if item.agent else ""}

    def validate(self, draft: Mapping[str, Any]) -> str | None:
        if not draft.get("agentId"):
            return "Please select an agent"
        return super().validate(draft)

    def dialog_hints(self) -> dict[str, Any]:
        return {**super().dialog_hints(), "agent_options": agent_options_payload(self.agent_options, include_all=False)}

    def row(self, item: Coupon) -> dict[str, Any]:
        return {**super().row(item), "agent": agent_label(item.agent)}

    def render(self) -> dict[str, Any]:
        payload = super().render()
        payload["filter_options"] = agent_options_payload(self.agent_options, include_all=True)
        return payload


class AgentCouponsPage(CouponsPageBase):
    module = "agent_coupons"
    title = "My coupons"
