"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar


class MenuController:
    """Manages main window menu creation and action connections.

    Actions are created once in `setup_menus` and wired by name in
    `connect_actions`; names without a handler stay unconnected.
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references."""
        menubar = QMenuBar(self.window)

        # File Menu
        file_menu = menubar.addMenu("File")
        self.actions["choose_library"] = file_menu.addAction("Choose Library Folder…")
        self.actions["rescan"] = file_menu.addAction("Rescan")
        self.actions["rescan"].setShortcut(QKeySequence.Refresh)
        file_menu.addSeparator()
        self.actions["exit"] = file_menu.addAction("Exit")

        # View Menu
        view_menu = menubar.addMenu("View")
        self.actions["show_main"] = view_menu.addAction("Photos")
        self.actions["show_trash"] = view_menu.addAction("Trash")
        view_menu.addSeparator()
        self.actions["purge"] = view_menu.addAction("Delete Trash Permanently…")
        view_menu.addSeparator()
        self.actions["show_tutorial"] = view_menu.addAction("Show Tutorial")

        # Log Menu
        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        self.actions["open_latest_delete_log"] = log_menu.addAction("Open Latest Delete Log")
        log_menu.addSeparator()
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")
        self.actions["open_delete_log_directory"] = log_menu.addAction("Open Delete Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for name, action in self.actions.items():
            handler = handlers.get(name)
            if handler is not None:
                action.triggered.connect(handler)
        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

    def enable_action(self, name: str, enabled: bool = True) -> None:
        """Enable or disable a specific action."""
        action = self.actions.get(name)
        if action:
            action.setEnabled(enabled)
