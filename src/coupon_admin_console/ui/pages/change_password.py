from __future__ import annotations

import logging
from typing import Any

from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.ui_errors import user_message

from coupon_admin_console.app.navigation import Navigator
from coupon_admin_console.app.session_store import SessionStore
from coupon_admin_console.app.state import Route, home_path

logger = logging.getLogger(__name__)

CHANGE_PASSWORD_FAILED_MESSAGE = "Failed to change password"
PASSWORD_MISMATCH_MESSAGE = "New passwords do not match"


class ChangePasswordPage:
    title = "Change password"

    def __init__(self, store: SessionStore, navigator: Navigator) -> None:
        self.store = store
        self.navigator = navigator
        self.error: str | None = None

    def submit(self, old_password: str, new_password: str, confirm_password: str) -> bool:
        self.error = None
        if not old_password or not new_password:
            self.error = "Please fill in all password fields"
            return False
        if new_password != confirm_password:
            self.error = PASSWORD_MISMATCH_MESSAGE
            return False

        previous = self.store.identity
        logger.info("change_password_attempt")
        try:
            self.store.session.auth_client().change_password(old_password, new_password)
        except ApiError as exc:
            logger.info("change_password_failure", extra={"status_code": exc.status_code})
            self.error = user_message(exc, CHANGE_PASSWORD_FAILED_MESSAGE)
            return False
        logger.info("change_password_success")

        identity = self.store.establish()
        role = identity.role if identity else (previous.role if previous else None)
        self.navigator.navigate(home_path(role) if role else Route.LOGIN)
        return True

    def render(self) -> dict[str, Any]:
        identity = self.store.identity
        return {
            "title": self.title,
            "first_login": bool(identity and identity.is_first_login),
            "banner": "Password change required" if identity and identity.is_first_login else None,
            "error": self.error,
        }
