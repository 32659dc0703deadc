from __future__ import annotations

from dataclasses import dataclass

from ..models import Coupon
from .base import ResourceClient


@dataclass
class AdminCouponsClient(ResourceClient[Coupon]):
    module = "admin_coupons"
    base_path = "/admin/coupons"
    model = Coupon


@dataclass
class AgentCouponsClient(ResourceClient[Coupon]):
    """Coupons of the calling agent; ownership comes from the credential."""

    module = "agent_coupons"
    base_path = "/agent/coupons"
    model = Coupon
