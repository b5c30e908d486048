"""Core service interfaces and shared data structures.

This module defines the simple value types exchanged between the triage
state, the delete service and the UI layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.models import PhotoItem


class PurgeOutcome(Enum):
    """Result reported by the delete-confirmation flow."""

    GRANTED = "granted"
    DENIED = "denied"
    FAILED = "failed"


@dataclass(frozen=True)
class PurgeRequest:
    """Pending purge handle.

    Attributes:
        items: Snapshot of the trash at request time, newest-trashed first.
        locations: File paths to delete, in the same order as `items`.
    """

    items: tuple[PhotoItem, ...]
    locations: tuple[str, ...]

    @classmethod
    def for_items(cls, items: tuple[PhotoItem, ...]) -> PurgeRequest:
        return cls(items=items, locations=tuple(it.location for it in items))


@dataclass
class DeleteResult:
    """Outcome of a delete operation.

    Attributes:
        success_paths: Paths successfully deleted.
        failed: Tuples of (path, reason) for failures.
        log_path: Optional path to a detailed log file.
    """

    success_paths: list[str]
    failed: list[tuple[str, str]]
    log_path: str | None = None

    @property
    def failed_paths(self) -> list[str]:
        """Paths that could not be deleted."""
        return [p for p, _ in self.failed]
