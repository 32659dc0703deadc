from __future__ import annotations

from datetime import datetime
from typing import Any

from coupon_admin_sdk.models import AgentRef, DiscountType

NO_COUPON_LABEL = "No coupon"
MISSING_AGENT_LABEL = "N/A"

_STATUS_TONES = {
    "completed": "success",
    "processing": "info",
    "on-hold": "warning",
    "cancelled": "danger",
}


def format_vnd(amount: float | int | None) -> str:
    """Group thousands with dots and suffix the dong sign, e.g. ``150.000 ₫``."""
    value = int(round(amount or 0))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}{grouped} ₫"


def format_number(value: float | int) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_discount(discount_type: DiscountType | str, value: float | int) -> str:
    if DiscountType(discount_type) is DiscountType.PERCENT:
        return f"{format_number(value)}%"
    return format_vnd(value)


def discount_type_label(discount_type: DiscountType | str) -> str:
    if DiscountType(discount_type) is DiscountType.PERCENT:
        return "Percentage"
    return "Fixed amount (VND)"


def format_date(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def format_datetime(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y %H:%M")


def agent_label(agent: AgentRef | None) -> str:
    if agent is None or not agent.name:
        return MISSING_AGENT_LABEL
    return agent.name


def coupon_label(code: str | None) -> str:
    return code or NO_COUPON_LABEL


def status_tone(status: Any) -> str:
    raw = getattr(status, "value", status)
    return _STATUS_TONES.get(str(raw), "neutral")


def status_badge(status: Any) -> dict[str, str]:
    raw = str(getattr(status, "value", status))
    return {"label": raw, "tone": status_tone(raw)}
