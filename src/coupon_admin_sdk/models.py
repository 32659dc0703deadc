from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Role(str, Enum):
    ADMIN = "ADMIN"
    AGENT = "AGENT"


class DiscountType(str, Enum):
    PERCENT = "percent"
    FIXED_CART = "fixed_cart"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"
    CHECKOUT_DRAFT = "checkout-draft"
    TRASH = "trash"


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class StoredCredential(BaseModel):
    token: str
    env_name: str | None = None


class Identity(ApiModel):
    id: str = Field(alias="_id")
    name: str = ""
    phone: str = ""
    role: Role
    is_first_login: bool = Field(default=False, alias="isFirstLogin")


class LoginRequest(ApiModel):
    phone: str
    password: str


class LoginResponse(Identity):
    token: str | None = None


class ChangePasswordRequest(ApiModel):
    old_password: str = Field(alias="oldPassword")
    new_password: str = Field(alias="newPassword")


class AgentRef(ApiModel):
    id: str = Field(alias="_id")
    name: str | None = None


class Agent(ApiModel):
    id: str = Field(alias="_id")
    name: str
    phone: str
    active: bool = True


class AgentPayload(ApiModel):
    name: str
    phone: str
    active: bool = True


class Coupon(ApiModel):
    id: str = Field(alias="_id")
    code: str
    discount_type: DiscountType = Field(alias="discountType")
    discount_value: float = Field(alias="discountValue")
    agent: Optional[AgentRef] = Field(default=None, alias="agentId")
    active: bool = True
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("agent", mode="before")
    @classmethod
    def _coerce_agent(cls, value: Any) -> Any:
        # The API returns either a populated {_id, name} object or a bare id.
        if isinstance(value, str):
            return {"_id": value}
        return value


class CouponPayload(ApiModel):
    code: str
    discount_type: DiscountType = Field(alias="discountType")
    discount_value: float = Field(alias="discountValue")
    agent_id: str | None = Field(default=None, alias="agentId")


class Order(ApiModel):
    id: str = Field(alias="_id")
    wc_order_id: int | str = Field(alias="wcOrderId")
    total: float = 0
    discount_total: float = Field(default=0, alias="discountTotal")
    coupon_code_used: str | None = Field(default=None, alias="couponCodeUsed")
    agent: Optional[AgentRef] = Field(default=None, alias="agentId")
    status: OrderStatus | str = Field(default=OrderStatus.PENDING, union_mode="left_to_right")
    date_created: datetime | None = Field(default=None, alias="dateCreated")
    customer_name: str = Field(default="", alias="customerName")

    @field_validator("agent", mode="before")
    @classmethod
    def _coerce_agent(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"_id": value}
        return value


class DiscountRuleConfig(ApiModel):
    min_discount_percent: float = Field(default=0, alias="minDiscountPercent")
    max_discount_percent: float = Field(default=100, alias="maxDiscountPercent")
    min_discount_fixed: float = Field(default=0, alias="minDiscountFixed")
    max_discount_fixed: float = Field(default=999999999, alias="maxDiscountFixed")
    apply_rules: bool = Field(default=True, alias="applyRules")

    def bounds_for(self, discount_type: DiscountType) -> tuple[float, float]:
        if discount_type is DiscountType.PERCENT:
            return self.min_discount_percent, self.max_discount_percent
        return self.min_discount_fixed, self.max_discount_fixed


class StatsSummary(ApiModel):
    total_revenue: float = Field(default=0, alias="totalRevenue")
    total_orders: int = Field(default=0, alias="totalOrders")
    discount_given: float = Field(default=0, alias="discountGiven")


class DailyStat(ApiModel):
    date: str
    revenue: float = 0
    orders: int = 0


class StatsResponse(ApiModel):
    summary: StatsSummary = Field(default_factory=StatsSummary)
    daily: List[DailyStat] = Field(default_factory=list)

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, value: Any) -> Any:
        return value if value is not None else {}

    @field_validator("daily", mode="before")
    @classmethod
    def _default_daily(cls, value: Any) -> Any:
        return value if value is not None else []


class SyncResult(ApiModel):
    imported: int = 0


class ListResponse(ApiModel, Generic[T]):
    data: List[T] = Field(default_factory=list)
    total: int = 0

    @field_validator("data", mode="before")
    @classmethod
    def _default_data(cls, value: Any) -> Any:
        return value if value is not None else []

    @field_validator("total", mode="before")
    @classmethod
    def _default_total(cls, value: Any) -> Any:
        return value if value is not None else 0
