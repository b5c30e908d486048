"""Photo library catalog backed by a folder on disk.

Enumerates image files under a root directory, newest-added first. Errors
are logged and reported as an empty result; the UI treats both cases as
"nothing left to review".
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
import os
from pathlib import Path

from loguru import logger

from core.models import PhotoItem
from infrastructure.utils import get_added_timestamp, to_datetime

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".webp",
    ".heic",
    ".heif",
    ".tif",
    ".tiff",
)


def _normalize_extensions(extensions: Iterable[str] | None) -> frozenset[str]:
    exts = extensions if extensions else DEFAULT_EXTENSIONS
    result: set[str] = set()
    for ext in exts:
        e = str(ext).strip().lower()
        if not e:
            continue
        result.add(e if e.startswith(".") else f".{e}")
    return frozenset(result)


class FolderMediaCatalog:
    """Query image files under `root`, sorted by descending add-time."""

    def __init__(
        self,
        root: str | Path,
        extensions: Iterable[str] | None = None,
        recursive: bool = True,
        time_source: Callable[[str], float | None] = get_added_timestamp,
    ) -> None:
        self._root = Path(root)
        self._extensions = _normalize_extensions(extensions)
        self._recursive = recursive
        self._time_source = time_source

    @property
    def root(self) -> Path:
        return self._root

    def set_root(self, root: str | Path) -> None:
        self._root = Path(root)

    def query(self) -> list[PhotoItem]:
        """Return the catalog, newest first; ties ordered by location."""
        if not self._root.is_dir():
            logger.warning("Catalog root is not a directory: {}", self._root)
            return []

        stamped: list[tuple[float, float | None, str]] = []
        try:
            for path in self._iter_files():
                ts = self._time_source(path)
                stamped.append((ts if ts is not None else 0.0, ts, path))
        except OSError as ex:
            logger.warning("Catalog query failed under {}: {}", self._root, ex)
            return []

        # Two stable passes: location ascending, then time descending
        stamped.sort(key=lambda it: it[2])
        stamped.sort(key=lambda it: it[0], reverse=True)
        items = [PhotoItem.from_path(p, added_at=to_datetime(ts)) for _, ts, p in stamped]
        logger.info("Catalog query: {} photos under {}", len(items), self._root)
        return items

    def _iter_files(self) -> Iterator[str]:
        root = os.path.normpath(str(self._root))

        def _on_error(ex: OSError) -> None:
            # The root itself failing means the whole query failed
            if ex.filename is not None and os.path.normpath(str(ex.filename)) == root:
                raise ex
            logger.debug("Skipping unreadable entry: {}", ex)

        if self._recursive:
            for dirpath, dirnames, filenames in os.walk(self._root, onerror=_on_error):
                dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
                for name in filenames:
                    if self._accepts(name):
                        yield os.path.join(dirpath, name)
        else:
            with os.scandir(self._root) as it:
                for entry in it:
                    try:
                        if entry.is_file() and self._accepts(entry.name):
                            yield entry.path
                    except OSError as ex:
                        _on_error(ex)

    def _accepts(self, name: str) -> bool:
        if name.startswith("."):
            return False
        return os.path.splitext(name)[1].lower() in self._extensions
