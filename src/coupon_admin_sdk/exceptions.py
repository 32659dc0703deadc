from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"

    @property
    def server_message(self) -> str | None:
        """The human message the API sent, if any."""
        if not isinstance(self.raw_payload, dict):
            return None
        message = self.raw_payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
        return None


class AuthError(ApiError):
    """401: credential missing, expired or rejected."""


class PermissionDeniedError(ApiError):
    """403: the credential's role may not use this endpoint."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    """400/422, including discount values outside the configured rules."""


class ConflictError(ApiError):
    """409, e.g. duplicate agent phone or coupon code."""


class RateLimitError(ApiError):
    pass


class ServerError(ApiError):
    pass


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class InvalidResponseError(ApiError):
    """A 2xx answer whose body is not the JSON the endpoint promises."""
