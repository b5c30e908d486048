from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
)

from app.viewmodels.photo_vm import PhotoVM
from app.views.constants import ERROR_COLOR
from core.services.interfaces import PurgeRequest

# Above this many files the user must tick the acknowledgement box
LARGE_PURGE_THRESHOLD = 50


class DeleteConfirmDialog(QDialog):
    def __init__(self, request: PurgeRequest, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Confirm Delete")
        self.setModal(True)

        root = QVBoxLayout(self)
        count = len(request.locations)

        title = QLabel("即將把垃圾桶中的照片移至系統資源回收筒。")
        root.addWidget(title)
        root.addWidget(QLabel(f"照片：將刪除 {count} 張"))

        lst = QListWidget()
        for item in request.items:
            vm = PhotoVM(item)
            entry = QListWidgetItem(vm.file_name)
            entry.setToolTip(vm.tooltip)
            lst.addItem(entry)
        root.addWidget(lst)

        large = count > LARGE_PURGE_THRESHOLD
        self._confirm_box = QCheckBox("我已了解刪除風險並確認執行")
        if large:
            warn = QLabel(f"警告：一次刪除超過 {LARGE_PURGE_THRESHOLD} 張照片，請再次確認：")
            warn.setStyleSheet(f"color: {ERROR_COLOR}; font-weight: bold;")
            root.addWidget(warn)
            root.addWidget(self._confirm_box)
        else:
            self._confirm_box.setChecked(True)

        btns = QHBoxLayout()
        self.btn_ok = QPushButton("Delete")
        self.btn_cancel = QPushButton("Cancel")
        btns.addWidget(self.btn_ok)
        btns.addStretch(1)
        btns.addWidget(self.btn_cancel)
        root.addLayout(btns)

        self.btn_ok.clicked.connect(self._on_accept)
        self.btn_cancel.clicked.connect(self.reject)

    def _on_accept(self) -> None:
        if not self._confirm_box.isChecked():
            return
        self.accept()
