from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger


class _CatalogTask(QRunnable):
    """QRunnable that queries the media catalog off the UI thread.

    Emits `receiver.catalogLoaded(token, items)`; the receiver owns a Qt
    `Signal(int, object)` named `catalogLoaded`, so the result is applied on
    the UI thread in a single step.
    """

    def __init__(self, *, catalog: Any, receiver: QObject, token: int) -> None:
        super().__init__()
        self._catalog = catalog
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            items = self._catalog.query()
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.exception("Catalog task #{} failed: {}", self._token, ex)
            items = []
        try:
            self._receiver.catalogLoaded.emit(self._token, items)  # type: ignore[attr-defined]
        except RuntimeError as ex:  # pragma: no cover - window torn down mid-load
            logger.debug("Catalog result #{} dropped: {}", self._token, ex)


class CatalogTaskRunner:
    """Starts catalog loads on the global thread pool."""

    def __init__(self, *, catalog: Any, receiver: QObject) -> None:
        self._catalog = catalog
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request_load(self, token: int) -> None:
        self._pool.start(_CatalogTask(catalog=self._catalog, receiver=self._receiver, token=token))
