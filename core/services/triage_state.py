"""Triage state: the active queue and the trash, with their transitions.

The two lists are owned by `TriageState` and only change through the
methods below. Readers get tuples, so nothing outside this module can
mutate them in place.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from core.models import PhotoItem, normalize_location
from core.services.interfaces import PurgeOutcome, PurgeRequest


class TriageError(ValueError):
    """Raised when a transition is called with its precondition unmet."""


class PurgeInProgressError(TriageError):
    """Raised when a purge is requested while another one is pending."""


class TriageState:
    """Active list (catalog order) and trash list (newest-trashed first)."""

    def __init__(self) -> None:
        self._active: list[PhotoItem] = []
        self._trash: list[PhotoItem] = []
        self._pending: PurgeRequest | None = None

    # Read API
    @property
    def active(self) -> tuple[PhotoItem, ...]:
        return tuple(self._active)

    @property
    def trashed(self) -> tuple[PhotoItem, ...]:
        return tuple(self._trash)

    @property
    def trash_count(self) -> int:
        return len(self._trash)

    @property
    def is_empty(self) -> bool:
        """True when nothing is left to review; trash contents do not matter."""
        return not self._active

    @property
    def purge_pending(self) -> bool:
        return self._pending is not None

    @property
    def pending_request(self) -> PurgeRequest | None:
        return self._pending

    def front(self, count: int = 2) -> tuple[PhotoItem, ...]:
        """Return the first `count` items of the active list."""
        return tuple(self._active[: max(0, count)])

    def contains_active(self, item: PhotoItem) -> bool:
        return item in self._active

    def contains_trash(self, item: PhotoItem) -> bool:
        return item in self._trash

    # Transitions
    def replace_active(self, items: Iterable[PhotoItem]) -> None:
        """Replace the active list wholesale with a fresh catalog result.

        Items currently in the trash are left out so that a photo is never
        in both lists. The trash itself is untouched.
        """
        trashed = {it.id for it in self._trash}
        fresh = [it for it in items if it.id not in trashed]
        self._active = fresh
        logger.info("Active list replaced: {} photos ({} in trash)", len(fresh), len(trashed))

    def trash(self, item: PhotoItem) -> None:
        self._take_active(item, "trash")
        self._trash.insert(0, item)
        logger.info("Trashed photo {}", item.id)

    def keep(self, item: PhotoItem) -> None:
        self._take_active(item, "keep")
        logger.debug("Kept photo {}", item.id)

    def recover(self, item: PhotoItem) -> None:
        try:
            self._trash.remove(item)
        except ValueError as ex:
            raise TriageError(f"Cannot recover {item.id}: not in trash") from ex
        self._active.insert(0, item)
        logger.info("Recovered photo {}", item.id)

    def request_purge(self) -> PurgeRequest:
        """Snapshot the trash into a pending purge request."""
        if self._pending is not None:
            raise PurgeInProgressError("A purge is already pending")
        if not self._trash:
            raise TriageError("Cannot purge an empty trash")
        self._pending = PurgeRequest.for_items(tuple(self._trash))
        logger.info("Purge requested for {} photos", len(self._pending.items))
        return self._pending

    def complete_purge(
        self, outcome: PurgeOutcome, failed_locations: Iterable[str] = ()
    ) -> None:
        """Apply the confirmation outcome of the pending purge.

        On `GRANTED` the requested items leave the trash, except those whose
        file could not be deleted. Any other outcome leaves the trash as is.
        """
        request = self._pending
        if request is None:
            raise TriageError("No purge is pending")
        self._pending = None

        if outcome is not PurgeOutcome.GRANTED:
            logger.info("Purge {}: trash kept ({} photos)", outcome.value, len(self._trash))
            return

        failed = {normalize_location(p) for p in failed_locations}
        purged = {
            it.id for it in request.items if normalize_location(it.location) not in failed
        }
        self._trash = [it for it in self._trash if it.id not in purged]
        logger.info(
            "Purge granted: {} photos removed, {} failed, {} left in trash",
            len(purged),
            len(failed),
            len(self._trash),
        )

    def _take_active(self, item: PhotoItem, action: str) -> None:
        try:
            self._active.remove(item)
        except ValueError as ex:
            raise TriageError(f"Cannot {action} {item.id}: not in active list") from ex
