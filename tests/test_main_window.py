from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtCore = pytest.importorskip("PySide6.QtCore")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from app.viewmodels.main_vm import FIRST_LAUNCH_KEY, MainVM  # noqa: E402
from app.views.constants import SCREEN_MAIN, SCREEN_PERMISSION  # noqa: E402
from app.views.main_window import MainWindow  # noqa: E402
from infrastructure.delete_service import DeleteService  # noqa: E402
from infrastructure.library_access import LibraryAccessGate  # noqa: E402
from infrastructure.media_catalog import FolderMediaCatalog  # noqa: E402
from infrastructure.settings import JsonPreferences  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def _window(tmp_path: Path, library: Path) -> tuple[MainWindow, JsonPreferences]:
    prefs = JsonPreferences(tmp_path / "prefs.json")
    deleter = DeleteService(log_dir=str(tmp_path / "logs"))
    vm = MainVM(FolderMediaCatalog(library), deleter, prefs)
    win = MainWindow(vm=vm, access_gate=LibraryAccessGate(library), delete_service=deleter)
    return win, prefs


def _finish(win: MainWindow) -> None:
    QtCore.QThreadPool.globalInstance().waitForDone()
    win.close()


def test_tutorial_waits_for_library_access(qapp, tmp_path: Path) -> None:
    win, prefs = _window(tmp_path, tmp_path / "missing")

    win.start()

    assert win.stack.currentIndex() == SCREEN_PERMISSION
    assert not win.tutorial_visible
    assert prefs.get_bool(FIRST_LAUNCH_KEY, True) is True
    _finish(win)


def test_tutorial_blocks_swipe_screen_until_dismissed(qapp, tmp_path: Path) -> None:
    library = tmp_path / "photos"
    library.mkdir()
    win, prefs = _window(tmp_path, library)

    win.start()

    assert win.stack.currentIndex() == SCREEN_MAIN
    assert win.tutorial_visible
    assert not win.swipe_screen.isEnabled()

    win._tutorial.btn_start.click()

    assert not win.tutorial_visible
    assert win.swipe_screen.isEnabled()
    assert prefs.get_bool(FIRST_LAUNCH_KEY, True) is False
    _finish(win)
