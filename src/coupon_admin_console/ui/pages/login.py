from __future__ import annotations

import logging
from time import perf_counter
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.ui_errors import user_message

from coupon_admin_console.app.navigation import Navigator
from coupon_admin_console.app.session_store import SessionStore
from coupon_admin_console.app.state import Route, home_path
from coupon_admin_console.telemetry import EventCategory, TelemetryLogger, disabled_telemetry, result_event

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Login failed"


class LoginPage:
    title = "Sign in"

    def __init__(
        self,
        store: SessionStore,
        navigator: Navigator,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.store = store
        self.navigator = navigator
        self.telemetry = telemetry or disabled_telemetry()
        self.phone = ""
        self.password = ""
        self.error: str | None = None

    def submit(self, phone: str, password: str) -> bool:
        # Entered values survive a failed attempt.
        self.phone = phone
        self.password = password
        self.error = None
        if not phone.strip() or not password:
            self.error = "Please enter your phone number and password"
            return False

        started = perf_counter()
        self.store.session.begin_action()
        logger.info("login_attempt")
        try:
            payload = self.store.session.auth_client().login(phone, password)
        except (ApiError, PydanticValidationError) as exc:
            logger.info("login_failure", extra={"error": type(exc).__name__})
            self.error = user_message(exc, LOGIN_FAILED_MESSAGE)
            self._emit(started, error=exc)
            return False

        identity = self.store.record_login(payload)
        self.password = ""
        self._emit(started, context={"role": identity.role.value, "first_login": identity.is_first_login})
        logger.info("login_success", extra={"role": identity.role.value})
        if identity.is_first_login:
            self.navigator.navigate(Route.CHANGE_PASSWORD)
        else:
            self.navigator.navigate(home_path(identity.role))
        return True

    def render(self) -> dict[str, Any]:
        return {"title": self.title, "phone": self.phone, "error": self.error}

    def _emit(
        self,
        started: float,
        *,
        error: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.telemetry.emit(
            result_event(
                "auth.login",
                category=EventCategory.AUTH,
                started=started,
                trace_id=self.store.session.trace_id,
                error=error,
                context=context,
            )
        )
