"""Utilities for filesystem timestamps and their display formatting.

Best-effort helpers: they never raise on I/O errors and callers should
expect `None` when the data is not available.
"""

from __future__ import annotations

from datetime import datetime
import os

from loguru import logger

DISPLAY_DT_FMT = "%Y-%m-%d %H:%M"


def get_added_timestamp(path: str) -> float | None:
    """Best-effort time the file was added to the library, as epoch seconds.

    Uses the birth time where the platform records it. On Windows
    `st_ctime` is the creation time; elsewhere it is the metadata change time,
    so the modification time is used instead.
    """
    try:
        st = os.stat(path)
    except OSError as ex:
        logger.debug("stat failed for {}: {}", path, ex)
        return None
    birth = getattr(st, "st_birthtime", None)
    if birth:
        return float(birth)
    if os.name == "nt":
        return float(st.st_ctime)
    return float(st.st_mtime)


def to_datetime(ts: float | None) -> datetime | None:
    if ts is None:
        return None
    try:
        return datetime.fromtimestamp(ts)
    except (OverflowError, OSError, ValueError):
        return None


def format_display_datetime(dt: datetime | None) -> str:
    """Format datetime for labels; empty string when None."""
    try:
        return dt.strftime(DISPLAY_DT_FMT) if dt else ""
    except (ValueError, TypeError, AttributeError):
        return ""
