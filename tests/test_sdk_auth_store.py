from __future__ import annotations

import json
import os
import stat

from coupon_admin_sdk.auth_store import AuthStore


def test_save_load_clear_roundtrip(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path, env_name="dev")
    store.save("token-1")

    reopened = AuthStore(base_dir=tmp_path, env_name="dev")
    assert reopened.load() == "token-1"

    reopened.clear()
    assert reopened.load() is None
    assert not (tmp_path / "session.json").exists()


def test_credential_file_is_private(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save("secret")
    path = tmp_path / "session.json"
    assert json.loads(path.read_text())["token"] == "secret"
    if os.name == "posix":
        assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_corrupt_file_is_discarded(tmp_path) -> None:
    (tmp_path / "session.json").write_text("{not json")
    store = AuthStore(base_dir=tmp_path)
    assert store.load() is None
    assert not (tmp_path / "session.json").exists()


def test_token_from_other_environment_is_ignored(tmp_path) -> None:
    AuthStore(base_dir=tmp_path, env_name="prod").save("prod-token")
    assert AuthStore(base_dir=tmp_path, env_name="staging").load() is None
