"""MainWindow: hosts the permission, swipe and trash screens.

The window owns no triage state of its own. Every user action goes through
the view-model and is followed by `refresh_screens()`, which re-renders the
visible screen from the view-model snapshots.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QMainWindow,
    QStackedWidget,
    QStyle,
    QToolBar,
    QToolButton,
)
from loguru import logger

from app.views.catalog_tasks import CatalogTaskRunner
from app.views.components.menu_controller import MenuController
from app.views.constants import (
    APP_TITLE,
    DEFAULT_CARD_SIZE,
    SCREEN_MAIN,
    SCREEN_PERMISSION,
    SCREEN_TRASH,
    VISIBLE_CARD_COUNT,
)
from app.views.dialogs.preview_dialog import PreviewDialog
from app.views.handlers.purge_handler import PurgeHandler
from app.views.image_tasks import ImageTaskRunner
from app.views.swipe_screen import SwipeScreen
from app.views.trash_screen import TrashScreen
from app.views.widgets.permission_view import PermissionRequestView
from app.views.widgets.tutorial_overlay import TutorialOverlay
from core.models import PhotoItem
from core.services.gesture_service import DEFAULT_SWIPE_THRESHOLD
from core.services.triage_state import TriageError
from infrastructure import logging as log_utils

WINDOW_SIZE_RATIO = 0.6


class MainWindow(QMainWindow):
    """Main application window."""

    imageLoaded = Signal(str, str, object)  # token, path, QImage
    catalogLoaded = Signal(int, object)  # load token, list[PhotoItem]

    def __init__(
        self,
        vm: Any,
        access_gate: Any,
        image_service: Any | None = None,
        delete_service: Any | None = None,
        settings: Any | None = None,
    ) -> None:
        """Initialize MainWindow with all services and components.

        Args:
            vm: ViewModel owning the triage state
            access_gate: Read-access gate for the library folder
            image_service: Image service for loading/processing images
            delete_service: Delete service for purging the trash
            settings: Settings instance for configuration
        """
        super().__init__()
        self._vm = vm
        self._gate = access_gate
        self._settings = settings
        self._preview: PreviewDialog | None = None
        self._preview_token: str | None = None
        self._tutorial: TutorialOverlay | None = None

        card_size = DEFAULT_CARD_SIZE
        threshold = DEFAULT_SWIPE_THRESHOLD
        if settings is not None:
            try:
                card_size = int(settings.get("thumbnail_size", DEFAULT_CARD_SIZE) or card_size)
                threshold = float(settings.get("swipe.threshold", threshold) or threshold)
            except (TypeError, ValueError) as ex:
                logger.warning("Invalid view settings, using defaults: {}", ex)

        self._image_runner = ImageTaskRunner(service=image_service, receiver=self)
        self._catalog_runner = CatalogTaskRunner(catalog=vm.catalog, receiver=self)
        self.status_reporter = StatusReporterImpl(self)
        self.purge_handler = PurgeHandler(
            vm=vm,
            delete_service=delete_service,
            parent_widget=self,
            ui_updater=self,
            status_reporter=self.status_reporter,
        )

        self.permission_view = PermissionRequestView()
        self.swipe_screen = SwipeScreen(self._image_runner, card_size=card_size, threshold=threshold)
        self.trash_screen = TrashScreen(self._image_runner)
        self.stack = QStackedWidget()
        self.stack.insertWidget(SCREEN_PERMISSION, self.permission_view)
        self.stack.insertWidget(SCREEN_MAIN, self.swipe_screen)
        self.stack.insertWidget(SCREEN_TRASH, self.trash_screen)
        self.setCentralWidget(self.stack)

        self._setup_toolbar()
        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus()
        self._connect_signals()

        self.setWindowTitle(APP_TITLE)
        self._setup_initial_window_size()
        self.statusBar().showMessage("Ready", 3000)

    def _setup_toolbar(self) -> None:
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.btn_trash = QToolButton()
        self.btn_trash.setIcon(self.style().standardIcon(QStyle.SP_TrashIcon))
        self.btn_trash.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.btn_trash.setToolTip("Trash")
        toolbar.addWidget(self.btn_trash)
        self.addToolBar(toolbar)

    def _connect_signals(self) -> None:
        self.imageLoaded.connect(self._on_image_loaded)
        self.catalogLoaded.connect(self._on_catalog_loaded)

        self.btn_trash.clicked.connect(self.show_trash)
        self.permission_view.accessRequested.connect(self.request_library_access)

        self.swipe_screen.trashRequested.connect(self.on_trash_photo)
        self.swipe_screen.keepRequested.connect(self.on_keep_photo)
        self.swipe_screen.previewRequested.connect(self.open_preview)
        self.swipe_screen.goToTrash.connect(self.show_trash)
        self.swipe_screen.rescanRequested.connect(self.start_load)

        self.trash_screen.backRequested.connect(self.show_main)
        self.trash_screen.recoverRequested.connect(self.on_recover_photo)
        self.trash_screen.purgeRequested.connect(self.purge_handler.purge_trash)

        self.menu_controller.connect_actions(
            {
                "choose_library": self.request_library_access,
                "rescan": self.start_load,
                "exit": self.close,
                "show_main": self.show_main,
                "show_trash": self.show_trash,
                "purge": self.purge_handler.purge_trash,
                "show_tutorial": self.show_tutorial,
                "open_latest_log": log_utils.open_latest_log,
                "open_latest_delete_log": log_utils.open_latest_delete_log,
                "open_log_directory": log_utils.open_log_directory,
                "open_delete_log_directory": log_utils.open_delete_log_directory,
            }
        )

    def _setup_initial_window_size(self) -> None:
        screen = QApplication.primaryScreen()
        if screen is not None:
            rect = screen.availableGeometry()
            self.resize(int(rect.width() * WINDOW_SIZE_RATIO), int(rect.height() * WINDOW_SIZE_RATIO))

    # Startup and loading
    def start(self) -> None:
        """Show the first screen; load photos only once access is granted."""
        if self._gate.has_access():
            self._enter_library()
        else:
            self._show_permission()

    def _enter_library(self) -> None:
        self.show_main()
        self.start_load()
        if self._vm.should_show_tutorial():
            self.show_tutorial()

    def start_load(self) -> None:
        if not self._gate.has_access():
            self._show_permission()
            return
        token = self._vm.begin_load()
        self.status_reporter.show_status("Scanning photo library…", timeout=0)
        self._catalog_runner.request_load(token)

    def _on_catalog_loaded(self, token: int, items: list[PhotoItem]) -> None:
        if self._vm.apply_catalog(token, items):
            self.status_reporter.show_status(f"{len(self._vm.photos)} photo(s) to review")
            self.refresh_screens()

    def request_library_access(self) -> None:
        def _choose() -> str | None:
            start = str(self._gate.root) if self._gate.root else ""
            return QFileDialog.getExistingDirectory(self, "Choose Photo Library", start) or None

        granted = self._gate.request_access(_choose)
        if granted is None:
            if not self._gate.has_access():
                self._show_permission()
            return
        self._vm.catalog.set_root(granted)
        self._enter_library()

    # Navigation
    def _show_permission(self) -> None:
        root = self._gate.root
        self.permission_view.set_library_path(str(root) if root else None)
        self.stack.setCurrentIndex(SCREEN_PERMISSION)
        self.btn_trash.setEnabled(False)
        self.menu_controller.enable_action("purge", False)

    def show_main(self) -> None:
        if not self._gate.has_access():
            self._show_permission()
            return
        self.stack.setCurrentIndex(SCREEN_MAIN)
        self.refresh_screens()

    def show_trash(self) -> None:
        if not self._gate.has_access():
            self._show_permission()
            return
        self.stack.setCurrentIndex(SCREEN_TRASH)
        self.refresh_screens()

    @property
    def tutorial_visible(self) -> bool:
        return self._tutorial is not None

    def show_tutorial(self) -> None:
        if self._tutorial is not None or not self._gate.has_access():
            return
        # Screens under the overlay must not react to keys or clicks
        self.swipe_screen.setEnabled(False)
        self.trash_screen.setEnabled(False)
        self._tutorial = TutorialOverlay(self.centralWidget())
        self._tutorial.dismissed.connect(self._on_tutorial_dismissed)
        self._tutorial.show()
        self._tutorial.raise_()
        self._tutorial.setFocus()

    def _on_tutorial_dismissed(self) -> None:
        self._tutorial = None
        self.swipe_screen.setEnabled(True)
        self.trash_screen.setEnabled(True)
        self._vm.dismiss_tutorial()

    def refresh_screens(self) -> None:
        """Re-render the current screen and the trash badge."""
        state = self._vm.state
        self.btn_trash.setText(f"Trash ({state.trash_count})" if state.trash_count else "Trash")
        self.btn_trash.setEnabled(self.stack.currentIndex() != SCREEN_PERMISSION)
        self.menu_controller.enable_action(
            "purge", state.trash_count > 0 and not state.purge_pending
        )
        index = self.stack.currentIndex()
        if index == SCREEN_MAIN:
            self.swipe_screen.show_photos(state.front(VISIBLE_CARD_COUNT), state.trash_count)
        elif index == SCREEN_TRASH:
            self.trash_screen.show_trash(state.trashed, state.purge_pending)

    # Triage actions
    def on_trash_photo(self, photo: PhotoItem) -> None:
        self._apply(self._vm.move_to_trash, photo)

    def on_keep_photo(self, photo: PhotoItem) -> None:
        self._apply(self._vm.keep_photo, photo)

    def on_recover_photo(self, photo: PhotoItem) -> None:
        self._apply(self._vm.recover_from_trash, photo)

    def _apply(self, action, photo: PhotoItem) -> None:
        try:
            action(photo)
        except TriageError as ex:
            # A card or tile outlived its list entry; the refresh below resyncs it
            logger.error("Ignored stale triage action: {}", ex)
        self.refresh_screens()

    # Preview
    def open_preview(self, photo: PhotoItem) -> None:
        dlg = PreviewDialog(photo.location, self)
        dlg.finished.connect(self._on_preview_closed)
        self._preview = dlg
        self._preview_token = self._image_runner.request_preview(photo.location)
        dlg.showFullScreen()

    def _on_preview_closed(self, *_: Any) -> None:
        self._preview = None
        self._preview_token = None

    def _on_image_loaded(self, token: str, path: str, image: Any) -> None:
        if token == self._preview_token and self._preview is not None:
            self._preview.set_image(image)
            return
        if self.swipe_screen.on_image_loaded(token, image):
            return
        if not self.trash_screen.on_image_loaded(token, image):
            logger.debug("Image for {} arrived after its widget was gone", path)

    def closeEvent(self, event) -> None:
        """Drop any in-flight catalog result before the window goes away."""
        self._vm.discard_pending_loads()
        event.accept()


class StatusReporterImpl:
    """Implementation of StatusReporter protocol."""

    def __init__(self, main_window: QMainWindow):
        self.window = main_window

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """Show status message in status bar."""
        self.window.statusBar().showMessage(message, timeout)
