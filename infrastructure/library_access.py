"""Read-access gate for the photo library folder."""

from __future__ import annotations

from collections.abc import Callable
import os
from pathlib import Path

from loguru import logger


class LibraryAccessGate:
    """Decide whether the library root can be read, and ask for another one.

    The triage state must not be loaded until `has_access()` is true.
    """

    def __init__(self, root: str | Path | None) -> None:
        self._root: Path | None = Path(root) if root else None

    @property
    def root(self) -> Path | None:
        return self._root

    def has_access(self) -> bool:
        root = self._root
        if root is None:
            return False
        if not root.is_dir():
            return False
        if not os.access(root, os.R_OK | os.X_OK):
            return False
        try:
            with os.scandir(root) as it:
                next(it, None)
        except OSError as ex:
            logger.warning("Library folder not listable: {} ({})", root, ex)
            return False
        return True

    def request_access(self, chooser: Callable[[], str | None]) -> Path | None:
        """Ask `chooser` for a folder; return it when readable, else None."""
        picked = chooser()
        if not picked:
            logger.info("Library access request cancelled")
            return None
        previous = self._root
        self._root = Path(picked)
        if self.has_access():
            logger.info("Library access granted: {}", self._root)
            return self._root
        logger.warning("Library access denied: {}", picked)
        self._root = previous
        return None
