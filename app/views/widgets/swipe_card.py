"""SwipeCard: a draggable photo card that resolves to keep or trash."""

from __future__ import annotations

from PySide6.QtCore import QEasingCurve, QPointF, QRectF, Qt, QVariantAnimation, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath, QPixmap
from PySide6.QtWidgets import QApplication, QWidget

from app.views.constants import (
    CARD_CORNER_RADIUS_PX,
    FLING_DISTANCE_PX,
    FLING_DURATION_MS,
    SNAP_BACK_DURATION_MS,
)
from core.models import PhotoItem
from core.services.gesture_service import (
    DEFAULT_SWIPE_THRESHOLD,
    SwipeDecision,
    card_opacity,
    card_rotation,
    overlay_tint,
    resolve_swipe,
)


class SwipeCard(QWidget):
    """Photo card dragged horizontally by the user.

    Past the threshold the card flies off and emits `swipedLeft` (trash) or
    `swipedRight` (keep) once the animation ends; otherwise it snaps back.
    A press-release without a drag emits `clicked`.
    """

    swipedLeft = Signal(object)
    swipedRight = Signal(object)
    clicked = Signal(object)

    def __init__(
        self, photo: PhotoItem, threshold: float = DEFAULT_SWIPE_THRESHOLD, parent=None
    ) -> None:
        super().__init__(parent)
        self.photo = photo
        self._threshold = float(threshold)
        self._offset = 0.0
        self._press_x: float | None = None
        self._press_offset = 0.0
        self._dragged = False
        self._pixmap: QPixmap | None = None
        self._interactive = True
        self._animation: QVariantAnimation | None = None

        self.setFocusPolicy(Qt.StrongFocus)
        self.setCursor(Qt.OpenHandCursor)
        self.setToolTip("← trash   |   keep →")

    @property
    def offset(self) -> float:
        return self._offset

    def set_image(self, image: QImage | None) -> None:
        if image is None or image.isNull():
            return
        self._pixmap = QPixmap.fromImage(image)
        self.update()

    def set_interactive(self, interactive: bool) -> None:
        """Only the front card reacts to input; the one behind is display-only."""
        self._interactive = interactive
        self.setAttribute(Qt.WA_TransparentForMouseEvents, not interactive)
        self.setCursor(Qt.OpenHandCursor if interactive else Qt.ArrowCursor)

    def fling(self, decision: SwipeDecision) -> None:
        """Animate the card off-screen as if swiped, then emit the outcome."""
        if decision is not SwipeDecision.CANCEL:
            self.set_interactive(False)
        if decision is SwipeDecision.KEEP:
            self._animate_to(float(FLING_DISTANCE_PX), FLING_DURATION_MS, decision)
        elif decision is SwipeDecision.TRASH:
            self._animate_to(float(-FLING_DISTANCE_PX), FLING_DURATION_MS, decision)
        else:
            self._animate_to(0.0, SNAP_BACK_DURATION_MS, decision)

    # Mouse and keyboard
    def mousePressEvent(self, event) -> None:
        if not self._interactive or event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self._stop_animation()
        self._press_x = event.position().x()
        self._press_offset = self._offset
        self._dragged = False
        self.setCursor(Qt.ClosedHandCursor)

    def mouseMoveEvent(self, event) -> None:
        if self._press_x is None:
            return
        dx = event.position().x() - self._press_x
        if abs(dx) >= QApplication.startDragDistance():
            self._dragged = True
        if self._dragged:
            self._offset = self._press_offset + dx
            self.update()

    def mouseReleaseEvent(self, event) -> None:
        if self._press_x is None:
            super().mouseReleaseEvent(event)
            return
        self._press_x = None
        self.setCursor(Qt.OpenHandCursor)
        if not self._dragged:
            self.clicked.emit(self.photo)
            return
        self.fling(resolve_swipe(self._offset, self._threshold))

    def keyPressEvent(self, event) -> None:
        if self._interactive and event.key() == Qt.Key_Left:
            self.fling(SwipeDecision.TRASH)
        elif self._interactive and event.key() == Qt.Key_Right:
            self.fling(SwipeDecision.KEEP)
        elif self._interactive and event.key() in (Qt.Key_Space, Qt.Key_Return, Qt.Key_Enter):
            self.clicked.emit(self.photo)
        else:
            super().keyPressEvent(event)

    # Painting
    def paintEvent(self, event) -> None:  # pylint: disable=unused-argument
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)

        rect = QRectF(self.rect())
        center = rect.center()
        painter.translate(center + QPointF(self._offset, 0.0))
        painter.rotate(card_rotation(self._offset))
        painter.translate(-center)
        painter.setOpacity(card_opacity(self._offset))

        clip = QPainterPath()
        clip.addRoundedRect(rect, CARD_CORNER_RADIUS_PX, CARD_CORNER_RADIUS_PX)
        painter.setClipPath(clip)
        painter.fillRect(rect, self.palette().alternateBase())

        if self._pixmap is not None and not self._pixmap.isNull():
            # Scale to cover the card, cropping the overflow
            scaled = self._pixmap.scaled(
                rect.size().toSize(), Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation
            )
            x = (rect.width() - scaled.width()) / 2
            y = (rect.height() - scaled.height()) / 2
            painter.drawPixmap(QPointF(x, y), scaled)
        else:
            painter.drawText(rect, Qt.AlignCenter, "Loading…")

        r, g, b, a = overlay_tint(self._offset, self._threshold)
        if a > 0:
            painter.fillRect(rect, QColor(r, g, b, int(a * 255)))
        painter.end()

    # Animation
    def _animate_to(self, target: float, duration_ms: int, decision: SwipeDecision) -> None:
        self._stop_animation()
        anim = QVariantAnimation(self)
        anim.setStartValue(float(self._offset))
        anim.setEndValue(float(target))
        anim.setDuration(duration_ms)
        anim.setEasingCurve(QEasingCurve.OutCubic)
        anim.valueChanged.connect(self._on_offset_animated)
        anim.finished.connect(lambda: self._on_animation_finished(decision))
        self._animation = anim
        anim.start()

    def _stop_animation(self) -> None:
        if self._animation is not None:
            self._animation.stop()
            self._animation = None

    def _on_offset_animated(self, value) -> None:
        self._offset = float(value)
        self.update()

    def _on_animation_finished(self, decision: SwipeDecision) -> None:
        self._animation = None
        if decision is SwipeDecision.TRASH:
            self.swipedLeft.emit(self.photo)
        elif decision is SwipeDecision.KEEP:
            self.swipedRight.emit(self.photo)
