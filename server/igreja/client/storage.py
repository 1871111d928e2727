"""Persisted client storage.

Plays the role a browser's local storage plays for a web frontend: a small
key/value space that survives restarts. The session token is kept under a
single key; its absence means the client is logged out.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "igreja.auth_token"


class TokenStore:
    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryTokenStore(TokenStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileTokenStore(TokenStore):
    """JSON file store, written atomically and readable only by its owner."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError):
            logger.warning("token_store_unreadable", exc_info=True, extra={"path": str(self.path)})
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("token_store_corrupt", extra={"path": str(self.path)})
            return {}
        if not isinstance(data, dict):
            logger.warning("token_store_corrupt", extra={"path": str(self.path)})
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)
