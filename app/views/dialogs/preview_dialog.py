"""Full-screen photo preview with wheel zoom, double-click zoom and panning."""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QImage, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QDialog

from core.services.gesture_service import MIN_ZOOM, clamp_zoom, toggle_zoom

WHEEL_STEP = 1.15
HINT_TEXT = "Scroll to zoom / double-click to zoom in\nClick the background to go back"


class PreviewDialog(QDialog):
    """Shows one photo fitted to the screen.

    At 1x a single click closes the dialog; once zoomed, dragging pans.
    """

    def __init__(self, path: str, parent=None) -> None:
        super().__init__(parent)
        self.path = path
        self.setWindowTitle(path)
        self.setModal(True)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self._pixmap: QPixmap | None = None
        self._scale = MIN_ZOOM
        self._pan = QPointF(0.0, 0.0)
        self._press: QPointF | None = None
        self._press_pan = QPointF(0.0, 0.0)
        self._moved = False
        # A single click closes only if no double-click follows
        self._close_timer = QTimer(self)
        self._close_timer.setSingleShot(True)
        self._close_timer.setInterval(QApplication.doubleClickInterval())
        self._close_timer.timeout.connect(self.accept)

    def set_image(self, image: QImage | None) -> None:
        if image is None or image.isNull():
            return
        self._pixmap = QPixmap.fromImage(image)
        self.update()

    def _set_scale(self, scale: float) -> None:
        self._scale = clamp_zoom(scale)
        if self._scale <= MIN_ZOOM:
            self._pan = QPointF(0.0, 0.0)
        self.update()

    def wheelEvent(self, event) -> None:
        steps = event.angleDelta().y() / 120.0
        if steps:
            self._set_scale(self._scale * (WHEEL_STEP**steps))

    def mouseDoubleClickEvent(self, event) -> None:  # pylint: disable=unused-argument
        self._close_timer.stop()
        self._press = None
        self._set_scale(toggle_zoom(self._scale))

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._press = event.position()
            self._press_pan = QPointF(self._pan)
            self._moved = False

    def mouseMoveEvent(self, event) -> None:
        if self._press is None or self._scale <= MIN_ZOOM:
            return
        delta = event.position() - self._press
        if delta.manhattanLength() >= QApplication.startDragDistance():
            self._moved = True
        self._pan = self._press_pan + delta
        self.update()

    def mouseReleaseEvent(self, event) -> None:  # pylint: disable=unused-argument
        pressed = self._press is not None
        self._press = None
        if pressed and not self._moved and self._scale <= MIN_ZOOM:
            self._close_timer.start()

    def paintEvent(self, event) -> None:  # pylint: disable=unused-argument
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0))
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        area = QRectF(self.rect())
        if self._pixmap is None or self._pixmap.isNull():
            painter.setPen(QColor(255, 255, 255))
            painter.drawText(area, Qt.AlignCenter, "Loading…")
            painter.end()
            return

        fitted = self._pixmap.size().scaled(area.size().toSize(), Qt.KeepAspectRatio)
        w = fitted.width() * self._scale
        h = fitted.height() * self._scale
        target = QRectF(
            area.center().x() - w / 2 + self._pan.x(),
            area.center().y() - h / 2 + self._pan.y(),
            w,
            h,
        )
        painter.drawPixmap(target, self._pixmap, QRectF(self._pixmap.rect()))

        if self._scale <= MIN_ZOOM:
            painter.setPen(QColor(255, 255, 255, 128))
            hint = QRectF(area.left(), area.bottom() - 80, area.width(), 50)
            painter.drawText(hint, Qt.AlignCenter, HINT_TEXT)
        painter.end()
