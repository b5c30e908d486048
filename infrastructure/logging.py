"""Logging initialization and log-location utilities using loguru."""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys

from loguru import logger

APP_NAME = "PhotoDeleter"


def get_app_data_directory() -> str:
    """Per-user data directory: `%LOCALAPPDATA%` on Windows, XDG-style elsewhere."""
    base = os.environ.get("LOCALAPPDATA") or str(Path.home() / ".local" / "share")
    return os.path.join(base, APP_NAME)


def get_log_directory() -> str:
    """Get the main log directory path."""
    return os.path.join(get_app_data_directory(), "logs")


def get_delete_log_directory() -> str:
    """Get the delete log directory path."""
    return os.path.join(get_app_data_directory(), "delete_logs")


def init_logging(log_dir: str | None = None, level: str = "INFO") -> None:
    """Initialize rotating file logging under the given directory."""
    if log_dir is None:
        log_dir = get_log_directory()
    log_path = Path(os.path.expandvars(log_dir))
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        str(log_path / "app_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level,
    )


def _find_latest(directory: str, pattern: str) -> Path | None:
    try:
        path = Path(directory)
        if not path.exists():
            return None
        files = list(path.glob(pattern))
        if not files:
            return None
        return max(files, key=lambda p: p.stat().st_mtime)
    except (OSError, ValueError):
        return None


def find_latest_log_file(log_dir: str | None = None) -> Path | None:
    """Find the latest app log file in the specified directory."""
    return _find_latest(log_dir or get_log_directory(), "app_*.log")


def find_latest_delete_log_file(log_dir: str | None = None) -> Path | None:
    """Find the latest delete audit log."""
    return _find_latest(log_dir or get_delete_log_directory(), "delete_*.csv")


def open_in_default_app(target: str) -> bool:
    """Open a file or directory with the desktop's default handler."""
    try:
        if os.name == "nt":
            os.startfile(target)  # pylint: disable=no-member
        elif sys.platform == "darwin":
            subprocess.run(["open", target], check=True)
        else:
            subprocess.run(["xdg-open", target], check=True)
        return True
    except (OSError, subprocess.CalledProcessError) as ex:
        logger.warning("Could not open {}: {}", target, ex)
        return False


def open_latest_log() -> bool:
    log_file = find_latest_log_file()
    if log_file:
        return open_in_default_app(str(log_file))
    return False


def open_latest_delete_log() -> bool:
    delete_file = find_latest_delete_log_file()
    if delete_file:
        return open_in_default_app(str(delete_file))
    return False


def open_log_directory() -> bool:
    return open_in_default_app(get_log_directory())


def open_delete_log_directory() -> bool:
    return open_in_default_app(get_delete_log_directory())
