from .auth_store import AuthStore
from .config import ALLOWED_PAGE_SIZES, ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    InvalidResponseError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .session import ApiSession
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error, user_message

__all__ = [
    "ALLOWED_PAGE_SIZES",
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "InvalidResponseError",
    "HttpClient",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitError",
    "ServerError",
    "TraceContext",
    "TransportError",
    "UserFacingError",
    "ValidationError",
    "load_config",
    "to_user_facing_error",
    "user_message",
]
