from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import pytest

from coupon_admin_sdk.error_mapper import map_error
from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import Agent, Coupon, DiscountRuleConfig, ListResponse

from coupon_admin_console.ui.pages.agents import DEFAULT_AGENT_PASSWORD, AgentsPage
from coupon_admin_console.ui.pages.coupons import AdminCouponsPage, AgentCouponsPage
from coupon_admin_console.ui.shared.view_state import ViewStateStatus


@dataclass
class FakeEndpoint:
    items: list[Any] = field(default_factory=list)
    total: int | None = None
    list_error: ApiError | None = None
    mutation_error: ApiError | None = None
    calls: list[tuple[str, Any]] = field(default_factory=list)

    def list(self, query: Mapping[str, Any] | None = None) -> ListResponse[Any]:
        self.calls.append(("list", dict(query or {})))
        if self.list_error:
            raise self.list_error
        total = self.total if self.total is not None else len(self.items)
        return ListResponse(data=list(self.items), total=total)

    def create(self, payload: Mapping[str, Any]) -> None:
        self.calls.append(("create", dict(payload)))
        if self.mutation_error:
            raise self.mutation_error

    def update(self, item_id: str, payload: Mapping[str, Any]) -> None:
        self.calls.append(("update", (item_id, dict(payload))))
        if self.mutation_error:
            raise self.mutation_error

    def delete(self, item_id: str) -> None:
        self.calls.append(("delete", item_id))
        if self.mutation_error:
            raise self.mutation_error

    def lists(self) -> list[dict[str, Any]]:
        return [args for name, args in self.calls if name == "list"]


@dataclass
class FakeAgents:
    agents: list[Agent] = field(default_factory=list)
    calls: int = 0

    def options(self, limit: int = 100) -> list[Agent]:
        self.calls += 1
        return list(self.agents)


@dataclass
class FakeRules:
    config: DiscountRuleConfig | None = None

    def get(self) -> DiscountRuleConfig:
        if self.config is None:
            raise map_error(403, {"message": "Forbidden"}, None)
        return self.config


def _agent(agent_id: str = "a1", name: str = "Nguyen A") -> Agent:
    return Agent(_id=agent_id, name=name, phone="0900000000", active=True)


def _coupon() -> Coupon:
    return Coupon.model_validate(
        {
            "_id": "c1",
            "code": "SUMMER10",
            "discountType": "percent",
            "discountValue": 10,
            "agentId": {"_id": "a1", "name": "Nguyen A"},
        }
    )


def test_create_agent_scenario() -> None:
    endpoint = FakeEndpoint(items=[_agent()], total=1)
    page = AgentsPage(endpoint)
    page.load()

    dialog = page.open_create()
    assert page.dialog_hints()["default_password"] == DEFAULT_AGENT_PASSWORD
    page.update_draft(name="Nguyen A", phone="0900000000")
    assert dialog.draft["active"] is True

    assert page.submit() is True

    assert ("create", {"name": "Nguyen A", "phone": "0900000000", "active": True}) in endpoint.calls
    assert page.dialog.is_open is False
    assert page.notifications.latest is not None
    assert page.notifications.latest["level"] == "success"
    assert endpoint.lists()[-1] == {"page": 1, "limit": 10, "search": ""}
    assert len(endpoint.lists()) == 2


def test_active_toggle_only_when_editing() -> None:
    page = AgentsPage(FakeEndpoint())
    page.open_create()
    page.update_draft(active=False)
    assert page.dialog.draft["active"] is True

    page.open_edit(_agent())
    page.update_draft(active=False)
    assert page.dialog.draft["active"] is False
    assert page.dialog_hints() == {"show_active_toggle": True}


def test_agent_missing_fields_block_locally() -> None:
    endpoint = FakeEndpoint()
    page = AgentsPage(endpoint)
    page.open_create()

    assert page.submit() is False

    assert endpoint.calls == []
    assert page.notifications.latest is not None
    assert page.notifications.latest["blocking"] is True
    assert page.dialog.is_open is True


def test_edit_agent_sends_put_by_id() -> None:
    endpoint = FakeEndpoint()
    page = AgentsPage(endpoint)
    page.open_edit(_agent("a9"))
    page.update_draft(name="Tran B")

    assert page.submit() is True
    assert ("update", ("a9", {"name": "Tran B", "phone": "0900000000", "active": True})) in endpoint.calls
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == AgentsPage.updated_message


def test_search_and_filter_reset_page_before_fetch() -> None:
    endpoint = FakeEndpoint(total=100)
    page = AdminCouponsPage(endpoint, agents=FakeAgents([_agent()]))
    page.load()
    page.next_page()
    page.next_page()
    assert endpoint.lists()[-1]["page"] == 3

    page.set_search("sum")
    assert endpoint.lists()[-1] == {"page": 1, "limit": 10, "search": "sum", "agentId": "all"}

    page.next_page()
    page.set_filter("a1")
    assert endpoint.lists()[-1] == {"page": 1, "limit": 10, "search": "sum", "agentId": "a1"}

    page.next_page()
    page.set_page_size(20)
    assert endpoint.lists()[-1] == {"page": 1, "limit": 20, "search": "sum", "agentId": "a1"}


def test_same_cursor_twice_yields_same_rows() -> None:
    endpoint = FakeEndpoint(items=[_coupon()], total=1)
    page = AgentCouponsPage(endpoint)
    page.load()
    first = page.render()["rows"]
    page.refresh()
    assert page.render()["rows"] == first
    assert endpoint.lists()[0] == endpoint.lists()[1]


def test_coupon_code_uppercased_and_locked_when_editing() -> None:
    page = AdminCouponsPage(FakeEndpoint(), agents=FakeAgents([_agent()]))
    page.open_create()
    page.update_draft(code="summer10")
    assert page.dialog.draft["code"] == "SUMMER10"
    assert "code" not in page.read_only_fields()

    page.open_edit(_coupon())
    page.update_draft(code="other", discountValue=15)
    assert page.dialog.draft["code"] == "SUMMER10"
    assert page.dialog.draft["discountValue"] == 15
    assert page.render()["dialog"]["read_only_fields"] == ["code"]
    assert page.dialog_hints()["code_read_only"] is True


def test_admin_coupon_without_agent_is_rejected_locally() -> None:
    endpoint = FakeEndpoint()
    page = AdminCouponsPage(endpoint, agents=FakeAgents())
    page.open_create()
    page.update_draft(code="NEW1", discountValue=5)

    assert page.submit() is False

    assert endpoint.calls == []
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Please select an agent"
    assert page.notifications.latest["blocking"] is True


def test_coupon_server_rejection_keeps_dialog_and_draft() -> None:
    rejection = map_error(400, {"message": "Discount percent must be between 0 and 100"}, "trace-1")
    endpoint = FakeEndpoint(mutation_error=rejection)
    rules = FakeRules(DiscountRuleConfig(maxDiscountPercent=100, applyRules=True))
    page = AdminCouponsPage(endpoint, agents=FakeAgents([_agent()]), rules=rules)
    page.load()
    page.open_create()
    page.update_draft(code="big150", discountType="percent", discountValue=150, agentId="a1")
    list_calls_before = len(endpoint.lists())

    assert page.submit() is False

    assert ("create", {"code": "BIG150", "discountType": "percent", "discountValue": 150.0, "agentId": "a1"}) in endpoint.calls
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Discount percent must be between 0 and 100"
    assert page.dialog.is_open is True
    assert page.dialog.draft == {"code": "BIG150", "discountType": "percent", "discountValue": 150, "agentId": "a1"}
    assert len(endpoint.lists()) == list_calls_before
    assert page.dialog_hints()["rules"] == "Allowed discount: 0% to 100%"


def test_coupon_failure_without_server_message_uses_fallback() -> None:
    endpoint = FakeEndpoint(mutation_error=map_error(500, {}, None))
    page = AgentCouponsPage(endpoint, rules=FakeRules())
    page.load()
    page.open_create()
    page.update_draft(code="x1", discountValue=5)

    assert page.submit() is False
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Operation failed"
    assert page.dialog_hints()["rules"] is None


def test_agent_coupon_payload_has_no_agent() -> None:
    endpoint = FakeEndpoint()
    page = AgentCouponsPage(endpoint)
    page.open_create()
    page.update_draft(code="mine5", discountType="fixed_cart", discountValue="20000")

    assert page.submit() is True
    assert ("create", {"code": "MINE5", "discountType": "fixed_cart", "discountValue": 20000.0}) in endpoint.calls
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Coupon created and synced to the store"


def test_delete_requires_confirmation() -> None:
    endpoint = FakeEndpoint(items=[_coupon()])
    prompts: list[str] = []
    page = AdminCouponsPage(endpoint, agents=FakeAgents(), confirm=lambda message: prompts.append(message) or False)

    assert page.delete("c1") is False

    assert ("delete", "c1") not in endpoint.calls
    assert "storefront" in prompts[0]


def test_delete_confirmed_refetches_and_keeps_page() -> None:
    endpoint = FakeEndpoint(total=11)
    page = AgentCouponsPage(endpoint, confirm=lambda message: True)
    page.load()
    page.next_page()
    endpoint.total = 10

    assert page.delete("c1") is True

    assert endpoint.lists()[-1]["page"] == 2
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Coupon deleted successfully"


def test_delete_failure_leaves_list_unchanged() -> None:
    endpoint = FakeEndpoint(items=[_coupon()], mutation_error=map_error(404, {"message": "Coupon not found"}, None))
    page = AgentCouponsPage(endpoint, confirm=lambda message: True)
    page.load()
    before = page.render()["rows"]
    list_calls = len(endpoint.lists())

    assert page.delete("c1") is False

    assert page.render()["rows"] == before
    assert len(endpoint.lists()) == list_calls
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Coupon not found"


def test_load_failure_renders_empty() -> None:
    endpoint = FakeEndpoint(items=[_coupon()], list_error=map_error(500, {}, None))
    page = AdminCouponsPage(endpoint, agents=FakeAgents())

    assert page.load() is False

    rendered = page.render()
    assert rendered["rows"] == []
    assert rendered["pagination"]["total"] == 0
    assert rendered["view_state"]["status"] == ViewStateStatus.EMPTY.value
    assert rendered["notifications"]["count"] == 0


def test_admin_coupon_rows_and_filter_options() -> None:
    agents = FakeAgents([_agent("a1", "Nguyen A"), _agent("a2", "Tran B")])
    page = AdminCouponsPage(FakeEndpoint(items=[_coupon()]), agents=agents)
    page.load()

    rendered = page.render()

    assert rendered["rows"][0]["discount"] == "10%"
    assert rendered["rows"][0]["agent"] == "Nguyen A"
    assert [option["value"] for option in rendered["filter_options"]] == ["all", "a1", "a2"]
    assert agents.calls == 1


def test_rules_fetched_once_per_page() -> None:
    calls: list[int] = []

    class CountingRules:
        def get(self) -> DiscountRuleConfig:
            calls.append(1)
            return DiscountRuleConfig()

    page = AgentCouponsPage(FakeEndpoint(), rules=CountingRules())
    page.load()
    page.set_search("x")
    assert len(calls) == 1


def test_open_create_on_read_only_page_is_an_error() -> None:
    from coupon_admin_console.ui.pages.orders import AgentOrdersPage

    page = AgentOrdersPage(FakeEndpoint())
    with pytest.raises(RuntimeError):
        page.open_create()
    assert "dialog" not in page.render()
