"""Settings access helpers for JSON-based configuration and preferences."""

from __future__ import annotations

import json
import os
from pathlib import Path
import tempfile
from typing import Any

from loguru import logger


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


class JsonPreferences:
    """Small persisted key/value store for per-user flags.

    A missing or unreadable file behaves like an empty store; writes replace
    the file atomically.
    """

    def __init__(self, prefs_path: str | Path) -> None:
        self._path = Path(prefs_path)
        self._data: dict[str, Any] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._data.get(key, default)
        return value if isinstance(value, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        self._data[key] = bool(value)
        self._write()

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            logger.warning("Preferences unreadable, starting empty: {} ({})", self._path, ex)
            return {}
        if not isinstance(data, dict):
            logger.warning("Preferences file is not an object, ignoring: {}", self._path)
            return {}
        return data

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".prefs_", suffix=".json", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
            os.replace(tmp, self._path)
        except OSError:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
