"""PurgeHandler: runs the confirm-then-recycle flow for the trash."""

from __future__ import annotations

from typing import Any, Protocol

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QDialog, QMessageBox
from loguru import logger

from app.views.dialogs.delete_confirm_dialog import DeleteConfirmDialog
from core.services.interfaces import PurgeOutcome, PurgeRequest


class UIUpdateCallback(Protocol):
    """Protocol for UI update callbacks."""

    def refresh_screens(self) -> None:
        """Re-render every screen from the view-model."""
        ...


class StatusReporter(Protocol):
    """Protocol for status reporting callback."""

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """Show status message."""
        ...


class PurgeHandler:
    """Handles permanent deletion of the trash.

    The confirmation dialog is opened without blocking; its outcome arrives
    through `finished`. While it is open the view-model reports a pending
    purge and the trigger stays disabled.
    """

    def __init__(
        self,
        vm: Any,
        delete_service: Any,
        parent_widget: QObject,
        ui_updater: UIUpdateCallback,
        status_reporter: StatusReporter,
    ) -> None:
        """Initialize with required services and callbacks.

        Args:
            vm: ViewModel owning the triage state
            delete_service: Service that recycles files and writes the audit log
            parent_widget: Parent widget for dialogs
            ui_updater: Callback for UI updates
            status_reporter: Callback for status messages
        """
        self.vm = vm
        self.deleter = delete_service
        self.parent = parent_widget
        self.ui_updater = ui_updater
        self.status_reporter = status_reporter
        self._dialog: DeleteConfirmDialog | None = None

    def purge_trash(self) -> None:
        """Ask for confirmation to delete everything in the trash."""
        if self.vm.purge_pending:
            return
        request = self.vm.request_purge()
        if request is None:
            # Empty trash, or the request could not be built (already logged)
            self.ui_updater.refresh_screens()
            return

        self.ui_updater.refresh_screens()
        dlg = DeleteConfirmDialog(request, self.parent)
        dlg.finished.connect(lambda code: self._on_confirm_finished(request, code))
        self._dialog = dlg
        dlg.open()

    def _on_confirm_finished(self, request: PurgeRequest, code: int) -> None:
        self._dialog = None
        if code != QDialog.Accepted:
            self.vm.finish_purge(PurgeOutcome.DENIED)
            self.ui_updater.refresh_screens()
            return

        try:
            result = self.deleter.execute_delete(request)
        except Exception as ex:
            logger.exception("Purge failed: {}", ex)
            self.vm.finish_purge(PurgeOutcome.FAILED)
            self.ui_updater.refresh_screens()
            QMessageBox.critical(self.parent, "Error", f"Delete failed: {str(ex)}")
            return

        self.vm.finish_purge(PurgeOutcome.GRANTED, result)
        self.ui_updater.refresh_screens()

        if result.success_paths:
            self.status_reporter.show_status(
                f"Deleted {len(result.success_paths)} photo(s). Log: {result.log_path or ''}",
                timeout=5000,
            )
        if result.failed:
            QMessageBox.warning(
                self.parent,
                "Delete",
                f"Failed: {len(result.failed)} photo(s) stay in the trash. See log.",
            )
