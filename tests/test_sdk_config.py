from __future__ import annotations

import pytest

from coupon_admin_sdk.config import ConfigError, load_config


def test_load_config_requires_base_url() -> None:
    with pytest.raises(ConfigError, match="COUPON_CONSOLE_API_BASE_URL"):
        load_config()


def test_load_config_profile_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COUPON_CONSOLE_ENV", "staging")
    monkeypatch.setenv("COUPON_CONSOLE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("COUPON_CONSOLE_API_BASE_URL_STAGING", "https://staging.example.com/api/")
    cfg = load_config()
    assert cfg.api_base_url == "https://staging.example.com/api"
    assert cfg.env_name == "staging"


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COUPON_CONSOLE_API_BASE_URL", "https://api.example.com")
    cfg = load_config()
    assert cfg.env_name == "dev"
    assert cfg.timeout is None
    assert cfg.max_connections == 10
    assert cfg.verify_ssl is True
    assert cfg.default_page_size == 10
    assert cfg.telemetry_enabled is False


def test_load_config_timeouts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COUPON_CONSOLE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("COUPON_CONSOLE_CONNECT_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("COUPON_CONSOLE_READ_TIMEOUT_SECONDS", "30")
    assert load_config().timeout == (2.5, 30.0)


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("COUPON_CONSOLE_CONNECT_TIMEOUT_SECONDS", "0"),
        ("COUPON_CONSOLE_READ_TIMEOUT_SECONDS", "-1"),
        ("COUPON_CONSOLE_MAX_CONNECTIONS", "0"),
        ("COUPON_CONSOLE_PAGE_SIZE", "15"),
        ("COUPON_CONSOLE_READ_TIMEOUT_SECONDS", "abc"),
        ("COUPON_CONSOLE_PAGE_SIZE", "ten"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv("COUPON_CONSOLE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError, match=key):
        load_config()


def test_load_config_reads_env_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    # Registers both keys with monkeypatch so values loaded from the file are undone.
    for key in ("COUPON_CONSOLE_API_BASE_URL", "COUPON_CONSOLE_PAGE_SIZE"):
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    env_file = tmp_path / ".env"
    env_file.write_text("COUPON_CONSOLE_API_BASE_URL=https://file.example.com\nCOUPON_CONSOLE_PAGE_SIZE=20\n")
    cfg = load_config(str(env_file))
    assert cfg.api_base_url == "https://file.example.com"
    assert cfg.default_page_size == 20
