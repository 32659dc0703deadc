from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from coupon_admin_sdk import ApiSession, AuthStore, ClientConfig  # noqa: E402

API = "https://api.example.com"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "COUPON_CONSOLE_ENV",
        "COUPON_CONSOLE_API_BASE_URL",
        "COUPON_CONSOLE_API_BASE_URL_DEV",
        "COUPON_CONSOLE_API_BASE_URL_STAGING",
        "COUPON_CONSOLE_CONNECT_TIMEOUT_SECONDS",
        "COUPON_CONSOLE_READ_TIMEOUT_SECONDS",
        "COUPON_CONSOLE_MAX_CONNECTIONS",
        "COUPON_CONSOLE_VERIFY_SSL",
        "COUPON_CONSOLE_PAGE_SIZE",
        "COUPON_CONSOLE_TELEMETRY_ENABLED",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=API)


@pytest.fixture
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path / "credentials", env_name="test")


@pytest.fixture
def api_session(config: ClientConfig, auth_store: AuthStore) -> ApiSession:
    return ApiSession(config, auth_store=auth_store)
