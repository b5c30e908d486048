from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget


class PermissionRequestView(QWidget):
    """Persistent prompt shown until the photo library folder is readable."""

    accessRequested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.addStretch(1)
        self._detail = QLabel()
        self._detail.setAlignment(Qt.AlignCenter)
        self._detail.setWordWrap(True)
        root.addWidget(self._detail)
        self.btn_grant = QPushButton("Grant access to photos")
        self.btn_grant.clicked.connect(self.accessRequested)
        root.addWidget(self.btn_grant, 0, Qt.AlignHCenter)
        root.addStretch(1)

    def set_library_path(self, path: str | None) -> None:
        if path:
            self._detail.setText(f"Cannot read the photo library:\n{path}")
        else:
            self._detail.setText("Choose the folder that holds your photo library.")
