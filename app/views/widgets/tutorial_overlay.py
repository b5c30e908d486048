from __future__ import annotations

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from app.views.constants import OVERLAY_BACKGROUND


def _tutorial_item(title: str, desc: str, color: str) -> QWidget:
    box = QWidget()
    v = QVBoxLayout(box)
    head = QLabel(title)
    head.setAlignment(Qt.AlignCenter)
    head.setStyleSheet(f"color: {color}; font-size: 20px; font-weight: bold;")
    body = QLabel(desc)
    body.setAlignment(Qt.AlignCenter)
    body.setStyleSheet("color: lightgray;")
    v.addWidget(head)
    v.addWidget(body)
    return box


class TutorialOverlay(QWidget):
    """First-launch overlay covering its parent until dismissed."""

    dismissed = Signal()

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet(f"TutorialOverlay {{ background-color: {OVERLAY_BACKGROUND}; }}")

        root = QVBoxLayout(self)
        root.setContentsMargins(40, 40, 40, 40)
        root.addStretch(1)

        title = QLabel("How does it work?")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("color: white; font-size: 26px;")
        root.addWidget(title)
        root.addSpacing(40)

        row = QHBoxLayout()
        row.addWidget(_tutorial_item("← Swipe left", "Mark for deletion", "red"))
        row.addWidget(_tutorial_item("Swipe right →", "Keep the photo", "lime"))
        root.addLayout(row)
        root.addSpacing(40)
        root.addWidget(_tutorial_item("Click a photo", "Zoom in to check details", "white"))
        root.addSpacing(60)

        self.btn_start = QPushButton("Get started")
        self.btn_start.clicked.connect(self._on_start)
        root.addWidget(self.btn_start, 0, Qt.AlignHCenter)
        root.addStretch(1)

        self.setFocusPolicy(Qt.StrongFocus)
        parent.installEventFilter(self)
        self.setGeometry(parent.rect())

    def eventFilter(self, watched, event) -> bool:
        if watched is self.parent() and event.type() == QEvent.Resize:
            self.setGeometry(self.parent().rect())
        return super().eventFilter(watched, event)

    def keyPressEvent(self, event) -> None:
        if event.key() in (Qt.Key_Return, Qt.Key_Enter, Qt.Key_Escape, Qt.Key_Space):
            self._on_start()
        event.accept()

    def _on_start(self) -> None:
        self.hide()
        self.dismissed.emit()
        self.deleteLater()
