from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger


class _ImageTask(QRunnable):
    """QRunnable for background image loading.

    Emits `receiver.imageLoaded(token, path, image)` upon completion. The
    receiver is expected to own a Qt `Signal(str, str, object)` named
    `imageLoaded`.
    """

    def __init__(
        self, *, path: str, side: int, is_preview: bool, service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._path = path
        self._side = side
        self._is_preview = is_preview
        self._service = service
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            if self._is_preview:
                img = self._service.get_preview(self._path, self._side)
            else:
                img = self._service.get_thumbnail(self._path, self._side)
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.error("Image task failed for {}: {}", self._path, ex)
            img = None
        try:
            self._receiver.imageLoaded.emit(self._token, self._path, img)  # type: ignore[attr-defined]
        except RuntimeError as ex:  # pragma: no cover - receiver already destroyed
            logger.debug("Image result dropped for {}: {}", self._path, ex)


class ImageTaskRunner:
    """Dispatches image load tasks to the global thread pool.

    Tokens identify the requesting widget kind:
    - Swipe card: "card|{path}|{side}"
    - Trash tile: "tile|{path}|{side}"
    - Full preview: "preview|{path}|0"
    """

    def __init__(self, *, service: Any, receiver: QObject) -> None:
        self._service = service
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request_card(self, path: str, side: int) -> str:
        return self._start("card", path, side, is_preview=False)

    def request_tile(self, path: str, side: int) -> str:
        return self._start("tile", path, side, is_preview=False)

    def request_preview(self, path: str) -> str:
        """Request a full-resolution preview. Returns the token string."""
        return self._start("preview", path, 0, is_preview=True)

    def _start(self, kind: str, path: str, side: int, *, is_preview: bool) -> str:
        token = f"{kind}|{path}|{side}"
        if self._service is None:
            return token
        task = _ImageTask(
            path=path,
            side=side,
            is_preview=is_preview,
            service=self._service,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
        return token
