"""Image loading, scaling and caching for cards, tiles and previews.

Qt decodes the common formats; Pillow with the pillow-heif opener handles
HEIC/HEIF. Results are cached in memory (LRU) and on disk as JPEG.
"""

from __future__ import annotations

from collections import OrderedDict
import hashlib
import os
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QColor, QImage, QImageReader
from loguru import logger
from pillow_heif import register_heif_opener

from infrastructure.logging import get_app_data_directory

register_heif_opener()

PILLOW_EXTENSIONS = {".heic", ".heif"}
PLACEHOLDER_SIDE = 64
PLACEHOLDER_GREY = 220


def _compute_cache_key(path: str, size_key: int) -> str:
    """Compute a stable cache key from path, mtime, size, and requested side."""
    try:
        st = os.stat(path)
        sig = f"{path}|{int(st.st_mtime_ns)}|{int(st.st_size)}|{int(size_key)}".encode(
            "utf-8", errors="ignore"
        )
    except OSError:
        sig = f"{path}|0|0|{int(size_key)}".encode("utf-8", errors="ignore")
    return hashlib.sha1(sig).hexdigest()


def _bounded_size(width: int, height: int, side: int) -> QSize:
    """Size that fits `width`x`height` inside a `side` square, never upscaled."""
    if width >= height:
        nw = min(side, width)
        nh = int(height * (nw / max(1, width)))
    else:
        nh = min(side, height)
        nw = int(width * (nh / max(1, height)))
    return QSize(max(1, nw), max(1, nh))


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, QImage] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        img = self._data.get(key)
        if img is None:
            return None
        self._data.move_to_end(key)
        return img

    def put(self, key: str, image: QImage) -> None:
        self._data[key] = image
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)


class ImageService:
    """Image service with memory/disk cache in front of the decoders."""

    def __init__(self, settings: object | None = None) -> None:
        self._mem_cap = 256
        self._disk_dir = os.path.join(get_app_data_directory(), "thumbs")
        if settings is not None:
            try:
                self._mem_cap = int(settings.get("thumbnail_mem_cache", 256) or 256)
            except (ValueError, TypeError):
                self._mem_cap = 256
            raw_dir = settings.get("thumbnail_disk_cache_dir", self._disk_dir)
            if isinstance(raw_dir, str) and raw_dir:
                self._disk_dir = os.path.expandvars(raw_dir)
        self._disk_path = Path(self._disk_dir)
        self._disk_path.mkdir(parents=True, exist_ok=True)
        self._mem_cache = _LRUCache(self._mem_cap)

    # Public API
    def get_thumbnail(self, path: str, size: int) -> QImage:
        """Return thumbnail image for `path` with max side `size`."""
        return self._get_image(path, size)

    def get_preview(self, path: str, max_side: int) -> QImage:
        """Return preview image for `path`; `max_side` 0 keeps full resolution."""
        return self._get_image(path, max_side)

    # Internal helpers
    def _get_image(self, path: str, requested_side: int) -> QImage:
        key = _compute_cache_key(path, requested_side)
        img = self._mem_cache.get(key)
        if img is not None and not img.isNull():
            return img

        disk_file = self._disk_path / f"{key}.jpg"
        if disk_file.exists():
            img = QImage(str(disk_file))
            if not img.isNull():
                self._mem_cache.put(key, img)
                return img

        img = self._load_from_source(path, requested_side)
        if img is None or img.isNull():
            img = QImage(PLACEHOLDER_SIDE, PLACEHOLDER_SIDE, QImage.Format_ARGB32)
            img.fill(QColor(PLACEHOLDER_GREY, PLACEHOLDER_GREY, PLACEHOLDER_GREY))
            # Placeholders stay out of the caches so a later retry can succeed
            return img

        if requested_side > 0:
            try:
                img.convertToFormat(QImage.Format_RGB32).save(str(disk_file), "JPEG", quality=85)
            except OSError as ex:
                logger.debug("Save disk cache failed for {}: {}", disk_file, ex)
        self._mem_cache.put(key, img)
        return img

    def _load_from_source(self, path: str, requested_side: int) -> QImage | None:
        """Pillow for HEIC/HEIF, otherwise QImageReader with Pillow as fallback."""
        if Path(path).suffix.lower() in PILLOW_EXTENSIONS:
            return self._load_via_pillow(path, requested_side)

        reader = QImageReader(path)
        reader.setAutoTransform(True)
        if requested_side > 0 and reader.size().isValid():
            orig = reader.size()
            if orig.width() > 0 and orig.height() > 0:
                reader.setScaledSize(_bounded_size(orig.width(), orig.height(), requested_side))
        img = reader.read()
        if img is not None and not img.isNull():
            if requested_side > 0 and max(img.width(), img.height()) > requested_side:
                img = img.scaled(
                    requested_side, requested_side, Qt.KeepAspectRatio, Qt.SmoothTransformation
                )
            return img
        logger.debug("QImageReader failed for {}: {}", path, reader.errorString())
        return self._load_via_pillow(path, requested_side)

    def _load_via_pillow(self, path: str, requested_side: int) -> QImage | None:
        try:
            with Image.open(path) as im:
                im = ImageOps.exif_transpose(im)
                if requested_side > 0:
                    im.thumbnail((requested_side, requested_side), Image.Resampling.LANCZOS)
                return self._pil_to_qimage(im)
        except (OSError, ValueError) as ex:
            logger.debug("Pillow load failed for {}: {}", path, ex)
            return None

    def _pil_to_qimage(self, pil_img: Any) -> QImage | None:
        """Convert a Pillow image to `QImage` and detach from the source buffer."""
        if pil_img.mode not in ("RGBA", "RGB"):
            pil_img = pil_img.convert("RGBA")
        if pil_img.mode == "RGB":
            data = pil_img.tobytes("raw", "RGB")
            fmt, depth = QImage.Format_RGB888, 3
        else:
            data = pil_img.tobytes("raw", "RGBA")
            fmt, depth = QImage.Format_RGBA8888, 4
        qimg = QImage(data, pil_img.width, pil_img.height, pil_img.width * depth, fmt)
        if qimg.isNull():
            return None
        return qimg.copy()
