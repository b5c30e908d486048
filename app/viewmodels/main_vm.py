"""ViewModel for catalog loading, triage transitions and purging."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from core.models import PhotoItem
from core.services.interfaces import DeleteResult, PurgeOutcome, PurgeRequest
from core.services.triage_state import TriageState
from infrastructure.delete_service import DeleteRequestError

FIRST_LAUNCH_KEY = "first_launch"


class MainVM:
    """Main application view-model.

    Mediates between the media catalog, the delete service, the preference
    store and the views. It owns the `TriageState`; views only read from it
    and act through the methods below.
    """

    def __init__(self, catalog, delete_service, preferences) -> None:
        """Create a MainVM.

        Args:
            catalog: Object with a `query()` method returning `PhotoItem`s.
            delete_service: Service with `build_request(request)`.
            preferences: Store with `get_bool(key, default)`/`set_bool(key, value)`.
        """
        self._catalog = catalog
        self._deleter = delete_service
        self._prefs = preferences
        self._state = TriageState()
        self._load_token = 0

    @property
    def state(self) -> TriageState:
        return self._state

    @property
    def catalog(self):
        return self._catalog

    @property
    def photos(self) -> tuple[PhotoItem, ...]:
        return self._state.active

    @property
    def trash_bin(self) -> tuple[PhotoItem, ...]:
        return self._state.trashed

    # Catalog loading
    def begin_load(self) -> int:
        """Start a load cycle; results of earlier cycles become stale."""
        self._load_token += 1
        logger.info("Catalog load #{} started", self._load_token)
        return self._load_token

    def apply_catalog(self, token: int, items: Iterable[PhotoItem]) -> bool:
        """Apply a finished load if `token` is still current."""
        if token != self._load_token:
            logger.info("Discarding stale catalog load #{} (current #{})", token, self._load_token)
            return False
        self._state.replace_active(items)
        return True

    def discard_pending_loads(self) -> None:
        self._load_token += 1

    def load_photos_sync(self) -> None:
        """Query the catalog and apply it in one step."""
        token = self.begin_load()
        self.apply_catalog(token, self._catalog.query())

    # Triage
    def move_to_trash(self, photo: PhotoItem) -> None:
        self._state.trash(photo)

    def keep_photo(self, photo: PhotoItem) -> None:
        self._state.keep(photo)

    def recover_from_trash(self, photo: PhotoItem) -> None:
        self._state.recover(photo)

    # Purge
    @property
    def purge_pending(self) -> bool:
        return self._state.purge_pending

    def request_purge(self) -> PurgeRequest | None:
        """Return the pending purge request, or None when there is nothing to do.

        A request that cannot be built is logged and the trash is left as is.
        """
        if not self._state.trashed or self._state.purge_pending:
            return None
        request = self._state.request_purge()
        try:
            return self._deleter.build_request(request)
        except DeleteRequestError as ex:
            logger.error("Building delete request failed: {}", ex)
            self._state.complete_purge(PurgeOutcome.FAILED)
            return None

    def finish_purge(self, outcome: PurgeOutcome, result: DeleteResult | None = None) -> None:
        """Apply the confirmation outcome to the trash."""
        failed = result.failed_paths if result is not None else []
        self._state.complete_purge(outcome, failed_locations=failed)

    # First-run tutorial
    def should_show_tutorial(self) -> bool:
        return self._prefs.get_bool(FIRST_LAUNCH_KEY, True)

    def dismiss_tutorial(self) -> None:
        try:
            self._prefs.set_bool(FIRST_LAUNCH_KEY, False)
        except OSError as ex:
            logger.error("Saving tutorial flag failed: {}", ex)
