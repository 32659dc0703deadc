from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv

ALLOWED_PAGE_SIZES: tuple[int, ...] = (5, 10, 20, 50)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float | None = None
    read_timeout_seconds: float | None = None
    max_connections: int = 10
    verify_ssl: bool = True
    default_page_size: int = 10
    telemetry_enabled: bool = False

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def timeout(self) -> tuple[float | None, float | None] | None:
        if self.connect_timeout_seconds is None and self.read_timeout_seconds is None:
            return None
        return (self.connect_timeout_seconds, self.read_timeout_seconds)


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("COUPON_CONSOLE_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"COUPON_CONSOLE_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("COUPON_CONSOLE_API_BASE_URL") or "").strip()
    )
    _require({"COUPON_CONSOLE_API_BASE_URL": api_base_url}, ["COUPON_CONSOLE_API_BASE_URL"])

    # Unset timeouts fall through to the transport default.
    connect_timeout_seconds = _read_optional_float("COUPON_CONSOLE_CONNECT_TIMEOUT_SECONDS")
    _validate(
        connect_timeout_seconds is None or connect_timeout_seconds > 0,
        (
            "Invalid COUPON_CONSOLE_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )
    read_timeout_seconds = _read_optional_float("COUPON_CONSOLE_READ_TIMEOUT_SECONDS")
    _validate(
        read_timeout_seconds is None or read_timeout_seconds > 0,
        f"Invalid COUPON_CONSOLE_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    max_connections = _read_int("COUPON_CONSOLE_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid COUPON_CONSOLE_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    default_page_size = _read_int("COUPON_CONSOLE_PAGE_SIZE", "10")
    _validate(
        default_page_size in ALLOWED_PAGE_SIZES,
        (
            "Invalid COUPON_CONSOLE_PAGE_SIZE: "
            f"expected one of {list(ALLOWED_PAGE_SIZES)}, got {default_page_size}"
        ),
    )

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        max_connections=max_connections,
        verify_ssl=_coerce_bool(os.getenv("COUPON_CONSOLE_VERIFY_SSL"), True),
        default_page_size=default_page_size,
        telemetry_enabled=_coerce_bool(os.getenv("COUPON_CONSOLE_TELEMETRY_ENABLED"), False),
    )
