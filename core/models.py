"""Core domain models for photos under triage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import hashlib
import os


def normalize_location(location: str) -> str:
    """Absolute, case-normalized form of `location` used for comparisons."""
    return os.path.normcase(os.path.abspath(location))


def photo_id_for(location: str) -> str:
    """Return the stable identifier for the photo stored at `location`."""
    normalized = normalize_location(location)
    return hashlib.sha1(normalized.encode("utf-8", errors="surrogateescape")).hexdigest()


@dataclass(frozen=True)
class PhotoItem:
    """A single photo from the library catalog.

    `id` is unique per photo and `location` is the absolute path used to
    load, display and delete the underlying file.
    """

    id: str
    location: str
    added_at: datetime | None = field(default=None, compare=False)

    @classmethod
    def from_path(cls, path: str, added_at: datetime | None = None) -> PhotoItem:
        """Build an item for `path`, deriving its id from the absolute path."""
        location = os.path.abspath(path)
        return cls(id=photo_id_for(location), location=location, added_at=added_at)
