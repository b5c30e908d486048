"""TrashScreen: review trashed photos, recover them, or delete them for good."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QStyle,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from app.viewmodels.photo_vm import PhotoVM
from app.views.constants import (
    ERROR_COLOR,
    TRASH_GRID_COLUMNS,
    TRASH_THUMB_SIZE,
    TRASH_TILE_CORNER_RADIUS_PX,
    TRASH_TILE_PADDING_PX,
)
from app.views.image_tasks import ImageTaskRunner
from core.models import PhotoItem


class _TrashTile(QWidget):
    """Square thumbnail with a recover button in the top-right corner."""

    recoverClicked = Signal(object)

    def __init__(self, photo: PhotoItem, side: int, parent=None) -> None:
        super().__init__(parent)
        self.photo = photo
        self.setFixedSize(side, side)
        self.setToolTip(PhotoVM(photo).tooltip)

        self._image = QLabel("Loading…", self)
        self._image.setAlignment(Qt.AlignCenter)
        self._image.setGeometry(0, 0, side, side)
        self._image.setStyleSheet(
            f"background-color: palette(alternate-base); border-radius: {TRASH_TILE_CORNER_RADIUS_PX}px;"
        )

        self._recover = QToolButton(self)
        self._recover.setIcon(self.style().standardIcon(QStyle.SP_BrowserReload))
        self._recover.setToolTip("Recover")
        self._recover.setStyleSheet(
            "QToolButton { background-color: rgba(0, 0, 0, 128); border-radius: 14px; }"
        )
        self._recover.setFixedSize(28, 28)
        self._recover.move(side - 32, 4)
        self._recover.clicked.connect(lambda: self.recoverClicked.emit(self.photo))

    def set_image(self, image: QImage | None) -> None:
        if image is None or image.isNull():
            return
        side = self.width()
        pm = QPixmap.fromImage(image).scaled(
            side, side, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation
        )
        # Centre-crop to a square
        x = max(0, (pm.width() - side) // 2)
        y = max(0, (pm.height() - side) // 2)
        self._image.setPixmap(pm.copy(x, y, side, side))


class TrashScreen(QWidget):
    """Grid of trashed photos, newest-trashed first."""

    backRequested = Signal()
    recoverRequested = Signal(object)
    purgeRequested = Signal()

    def __init__(self, runner: ImageTaskRunner, parent=None) -> None:
        super().__init__(parent)
        self._runner = runner
        self._tiles: dict[str, _TrashTile] = {}
        self._pending: dict[str, _TrashTile] = {}
        self._shown_ids: list[str] = []

        root = QVBoxLayout(self)

        header = QHBoxLayout()
        self.btn_back = QToolButton()
        self.btn_back.setIcon(self.style().standardIcon(QStyle.SP_ArrowBack))
        self.btn_back.setToolTip("Back")
        self.btn_back.clicked.connect(self.backRequested)
        header.addWidget(self.btn_back)

        self._title = QLabel()
        self._title.setStyleSheet("font-size: 16px; font-weight: bold;")
        header.addWidget(self._title)
        header.addStretch(1)

        self.btn_purge = QPushButton("Delete permanently")
        self.btn_purge.setStyleSheet(f"color: {ERROR_COLOR};")
        self.btn_purge.setFlat(True)
        self.btn_purge.clicked.connect(self.purgeRequested)
        header.addWidget(self.btn_purge)
        root.addLayout(header)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self._container = QWidget()
        self._grid = QGridLayout(self._container)
        self._grid.setSpacing(TRASH_TILE_PADDING_PX * 2)
        self._grid.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self._scroll.setWidget(self._container)
        root.addWidget(self._scroll)

    def show_trash(self, trash: tuple[PhotoItem, ...], purge_pending: bool) -> None:
        self._title.setText(f"Pending deletion ({len(trash)})")
        self.btn_purge.setVisible(bool(trash))
        self.btn_purge.setEnabled(bool(trash) and not purge_pending)

        ids = [p.id for p in trash]
        if ids == self._shown_ids:
            return
        self._shown_ids = ids

        for pid in [pid for pid in self._tiles if pid not in ids]:
            self._drop_tile(self._tiles.pop(pid))
        while self._grid.count():
            self._grid.takeAt(0)

        side = self._tile_side()
        for index, photo in enumerate(trash):
            tile = self._tiles.get(photo.id)
            if tile is None:
                tile = _TrashTile(photo, side, self._container)
                tile.recoverClicked.connect(self.recoverRequested)
                token = self._runner.request_tile(photo.location, TRASH_THUMB_SIZE)
                self._pending[token] = tile
                self._tiles[photo.id] = tile
            row, col = divmod(index, TRASH_GRID_COLUMNS)
            self._grid.addWidget(tile, row, col)

    def on_image_loaded(self, token: str, image: QImage | None) -> bool:
        tile = self._pending.pop(token, None)
        if tile is None:
            return False
        tile.set_image(image)
        return True

    def _tile_side(self) -> int:
        width = self._scroll.viewport().width() or TRASH_THUMB_SIZE * TRASH_GRID_COLUMNS
        spacing = self._grid.spacing() * (TRASH_GRID_COLUMNS + 1)
        return max(64, (width - spacing) // TRASH_GRID_COLUMNS)

    def _drop_tile(self, tile: _TrashTile) -> None:
        for token in [t for t, w in self._pending.items() if w is tile]:
            del self._pending[token]
        tile.hide()
        tile.deleteLater()
