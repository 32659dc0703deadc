from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from coupon_admin_sdk.models import Identity, Role

from coupon_admin_console.app.state import Route, home_path


class GuardKind(str, Enum):
    RENDER = "render"
    LOADING = "loading"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuardDecision:
    kind: GuardKind
    target: Route | None = None

    @property
    def is_redirect(self) -> bool:
        return self.kind is GuardKind.REDIRECT


RENDER = GuardDecision(GuardKind.RENDER)
LOADING = GuardDecision(GuardKind.LOADING)


def evaluate_guard(
    identity: Identity | None,
    loading: bool,
    required_role: Role | None,
    current_route: Route,
) -> GuardDecision:
    """Decide what a protected route shows; rules are checked in order.

    Stateless: recomputed on every navigation.
    """
    if loading:
        return LOADING
    if identity is None:
        return GuardDecision(GuardKind.REDIRECT, Route.LOGIN)
    if identity.is_first_login and current_route is not Route.CHANGE_PASSWORD:
        return GuardDecision(GuardKind.REDIRECT, Route.CHANGE_PASSWORD)
    if required_role is not None and identity.role is not required_role:
        return GuardDecision(GuardKind.REDIRECT, home_path(identity.role))
    return RENDER
