from __future__ import annotations

import logging
from time import perf_counter

from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk import ApiSession
from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import Identity, LoginResponse

from coupon_admin_console.app.navigation import Navigator
from coupon_admin_console.app.state import Route, SessionPhase
from coupon_admin_console.telemetry import EventCategory, TelemetryLogger, build_event, disabled_telemetry

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the signed-in identity for the lifetime of the console.

    The only writer of the identity record and, through ``ApiSession``,
    of the stored credential. Readers are the route guard and the pages.
    """

    def __init__(
        self,
        session: ApiSession,
        navigator: Navigator,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.session = session
        self.navigator = navigator
        self.telemetry = telemetry or disabled_telemetry()
        self.phase = SessionPhase.LOADING
        self._identity: Identity | None = None
        self._started = False

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def loading(self) -> bool:
        return self.phase is SessionPhase.LOADING

    def start(self) -> SessionPhase:
        """Initial credential check; runs ``establish`` at most once."""
        if not self._started:
            self._started = True
            self.establish()
        return self.phase

    def establish(self) -> Identity | None:
        started = perf_counter()
        self.session.begin_action()
        try:
            identity = self.session.auth_client().me()
        except (ApiError, PydanticValidationError) as exc:
            logger.info("session_establish_failed", extra={"error": type(exc).__name__})
            self.session.clear()
            self._identity = None
            self.phase = SessionPhase.ANONYMOUS
            self._emit("establish", success=False, started=started, error_code=getattr(exc, "code", "invalid_identity"))
            return None
        self._identity = identity
        self.phase = SessionPhase.AUTHENTICATED
        logger.info("session_established", extra={"role": identity.role.value})
        self._emit("establish", success=True, started=started)
        return identity

    def record_login(self, payload: LoginResponse) -> Identity:
        if payload.token:
            self.session.store_token(payload.token)
        identity = Identity.model_validate(payload.model_dump(by_alias=True, exclude={"token"}))
        self._identity = identity
        self._started = True
        self.phase = SessionPhase.AUTHENTICATED
        logger.info("session_recorded", extra={"role": identity.role.value, "first_login": identity.is_first_login})
        return identity

    def end_session(self) -> None:
        if self.phase is SessionPhase.ENDED:
            self.navigator.hard_redirect(Route.LOGIN)
            return
        started = perf_counter()
        self.session.begin_action()
        notified = False
        try:
            self.session.auth_client().logout()
            notified = True
        except ApiError as exc:
            logger.warning("logout_notify_failed", extra={"status_code": exc.status_code, "trace_id": exc.trace_id})
        except Exception:
            logger.exception("logout_notify_failed")
        finally:
            self.session.clear()
            self._identity = None
            self.phase = SessionPhase.ENDED
            self._emit("logout", success=notified, started=started)
            self.navigator.hard_redirect(Route.LOGIN)

    def _emit(self, action: str, *, success: bool, started: float, error_code: str | None = None) -> None:
        self.telemetry.emit(
            build_event(
                EventCategory.AUTH,
                f"session.{action}",
                trace_id=self.session.trace_id,
                started=started,
                success=success,
                error_code=error_code,
                context={"phase": self.phase.value},
            )
        )
