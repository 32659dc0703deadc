from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def user_message(exc: Exception, fallback: str) -> str:
    """Server-provided message when there is one, else the caller's fallback."""
    if isinstance(exc, ApiError):
        return exc.server_message or fallback
    return fallback


def to_user_facing_error(exc: Exception, fallback: str = "Request failed") -> UserFacingError:
    if not isinstance(exc, ApiError):
        return UserFacingError(message=fallback, details=type(exc).__name__)
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=user_message(exc, fallback), details=details, trace_id=exc.trace_id)
