from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_data_dir

from .models import StoredCredential

logger = logging.getLogger(__name__)


@dataclass
class AuthStore:
    """Process-wide home of the credential token.

    The token is mirrored in memory so that every outgoing request reads
    the latest value without touching the disk.
    """

    app_name: str = "coupon-console"
    filename: str = "session.json"
    base_dir: Path | None = None
    env_name: str | None = None
    _token: str | None = field(default=None, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, "CouponConsole"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, token: str) -> None:
        self._token = token
        self._loaded = True
        path = self._path()
        data = StoredCredential(token=token, env_name=self.env_name).model_dump()
        path.write_text(json.dumps(data, indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            logger.warning("credential_chmod_failed", extra={"path": str(path)})

    def load(self) -> str | None:
        if self._loaded:
            return self._token
        self._loaded = True
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
            stored = StoredCredential.model_validate(data)
        except (json.JSONDecodeError, ValueError):
            logger.warning("credential_file_corrupt", extra={"path": str(path)})
            self.clear()
            return None
        if self.env_name and stored.env_name and stored.env_name != self.env_name:
            return None
        self._token = stored.token
        return self._token

    def clear(self) -> None:
        self._token = None
        self._loaded = True
        path = self._path()
        if path.exists():
            path.unlink()
