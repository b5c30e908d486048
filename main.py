from __future__ import annotations

import os
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.main_vm import MainVM
from app.views.main_window import MainWindow
from infrastructure.delete_service import DeleteService
from infrastructure.image_service import ImageService
from infrastructure.library_access import LibraryAccessGate
from infrastructure.logging import get_app_data_directory, init_logging
from infrastructure.media_catalog import FolderMediaCatalog
from infrastructure.settings import JsonPreferences, JsonSettings

BASE_DIR = Path(__file__).parent


def _library_root(settings: JsonSettings) -> str:
    raw = settings.get("library.root", "") or str(Path.home() / "Pictures")
    return os.path.expanduser(os.path.expandvars(str(raw)))


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    init_logging(settings.get("logging.dir"), level=str(settings.get("logging.level", "INFO")))

    app = QApplication(sys.argv)

    root = _library_root(settings)
    catalog = FolderMediaCatalog(
        root,
        extensions=settings.get("library.extensions"),
        recursive=bool(settings.get("library.recursive", True)),
    )
    gate = LibraryAccessGate(root)
    prefs = JsonPreferences(Path(get_app_data_directory()) / "prefs.json")
    deleter = DeleteService(log_dir=settings.get("delete.log_dir"))
    img = ImageService(settings)
    vm = MainVM(catalog, deleter, prefs)
    logger.info("Starting with library root {}", root)

    win = MainWindow(
        vm=vm, access_gate=gate, image_service=img, delete_service=deleter, settings=settings
    )
    win.show()
    win.start()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
