from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from coupon_admin_sdk.error_mapper import map_error
from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import DiscountRuleConfig, StatsResponse

from coupon_admin_console.ui.pages.config_rules import ConfigRulesPage
from coupon_admin_console.ui.pages.dashboard import DashboardPage


@dataclass
class FakeStats:
    payload: dict | None = None
    error: ApiError | None = None

    def get_stats(self) -> StatsResponse:
        if self.error:
            raise self.error
        return StatsResponse.model_validate(self.payload or {})


@dataclass
class FakeRules:
    config: DiscountRuleConfig = field(default_factory=DiscountRuleConfig)
    load_error: ApiError | None = None
    save_error: ApiError | None = None
    saved: list[DiscountRuleConfig] = field(default_factory=list)

    def get(self) -> DiscountRuleConfig:
        if self.load_error:
            raise self.load_error
        return self.config

    def update(self, config: DiscountRuleConfig) -> DiscountRuleConfig:
        if self.save_error:
            raise self.save_error
        self.saved.append(config)
        return config


def test_dashboard_renders_summary_and_charts() -> None:
    page = DashboardPage(
        FakeStats(
            {
                "summary": {"totalRevenue": 1500000, "totalOrders": 12, "discountGiven": 250000},
                "daily": [
                    {"date": "2024-03-01", "revenue": 500000, "orders": 4},
                    {"date": "2024-03-02", "revenue": 1000000, "orders": 8},
                ],
            }
        )
    )

    assert page.load() is True

    rendered = page.render()
    assert [entry["display"] for entry in rendered["summary"]] == ["1.500.000 ₫", "12", "250.000 ₫"]
    assert rendered["charts"]["revenue"]["labels"] == ["2024-03-01", "2024-03-02"]
    assert rendered["charts"]["orders"]["values"] == [4, 8]


@pytest.mark.parametrize("payload", [{}, {"summary": None, "daily": None}])
def test_dashboard_missing_stats_render_as_zero(payload: dict) -> None:
    page = DashboardPage(FakeStats(payload))
    page.load()

    assert [entry["value"] for entry in page.summary()] == [0, 0, 0]
    assert page.charts()["revenue"]["values"] == []


def test_dashboard_failure_renders_zeros() -> None:
    page = DashboardPage(FakeStats(error=map_error(500, {}, None)))

    assert page.load() is False
    assert page.render()["summary"][0]["display"] == "0 ₫"
    assert page.render()["loading"] is False


def test_config_loads_and_saves_rules() -> None:
    rules = FakeRules(DiscountRuleConfig(minDiscountPercent=5, maxDiscountPercent=30))
    page = ConfigRulesPage(rules)
    page.load()
    assert page.draft["maxDiscountPercent"] == 30

    page.update(maxDiscountPercent="40")

    assert page.save() is True
    assert rules.saved[0].max_discount_percent == 40
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Configuration updated successfully"
    assert page.saving is False


def test_config_load_failure_keeps_defaults() -> None:
    page = ConfigRulesPage(FakeRules(load_error=map_error(403, {}, None)))

    assert page.load() is False
    assert page.draft == DiscountRuleConfig().model_dump(by_alias=True)


def test_config_rejects_inverted_bounds_locally() -> None:
    rules = FakeRules()
    page = ConfigRulesPage(rules)
    page.update(minDiscountPercent=50, maxDiscountPercent=10)

    assert page.save() is False
    assert rules.saved == []
    assert page.notifications.latest is not None
    assert page.notifications.latest["blocking"] is True


def test_config_bounds_unchecked_when_rules_off() -> None:
    rules = FakeRules()
    page = ConfigRulesPage(rules)
    page.update(applyRules=False, minDiscountPercent=50, maxDiscountPercent=10)

    assert page.render()["bounds_enabled"] is False
    assert page.save() is True
    assert rules.saved[0].apply_rules is False


def test_config_save_failure_message() -> None:
    page = ConfigRulesPage(FakeRules(save_error=map_error(500, {}, None)))

    assert page.save() is False
    assert page.notifications.latest is not None
    assert page.notifications.latest["message"] == "Failed to update configuration"


def test_config_unknown_field() -> None:
    with pytest.raises(KeyError):
        ConfigRulesPage(FakeRules()).update(maxDiscount=5)
