"""Lightweight view model wrapper around `PhotoItem`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.models import PhotoItem
from infrastructure.utils import format_display_datetime


@dataclass
class PhotoVM:
    """Expose convenient properties for labels and tooltips."""

    item: PhotoItem

    @property
    def file_name(self) -> str:
        """Base name of the file path."""
        return Path(self.item.location).name

    @property
    def folder(self) -> str:
        """Folder portion of the file path."""
        return str(Path(self.item.location).parent)

    @property
    def added_label(self) -> str:
        return format_display_datetime(self.item.added_at)

    @property
    def tooltip(self) -> str:
        parts = [self.file_name, self.folder]
        if self.added_label:
            parts.append(f"Added {self.added_label}")
        return "\n".join(parts)
