from __future__ import annotations

from app.viewmodels.main_vm import FIRST_LAUNCH_KEY, MainVM
from core.models import PhotoItem
from core.services.interfaces import DeleteResult, PurgeOutcome, PurgeRequest
from infrastructure.delete_service import DeleteRequestError


def _item(name: str) -> PhotoItem:
    return PhotoItem(id=name, location=f"/photos/{name}.jpg")


class FakeCatalog:
    def __init__(self, items: list[PhotoItem]) -> None:
        self.items = items
        self.calls = 0

    def query(self) -> list[PhotoItem]:
        self.calls += 1
        return list(self.items)


class FakeDeleter:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.requests: list[PurgeRequest] = []

    def build_request(self, request: PurgeRequest) -> PurgeRequest:
        if self.fail:
            raise DeleteRequestError("boom")
        self.requests.append(request)
        return request


class FakePrefs:
    def __init__(self) -> None:
        self.data: dict[str, bool] = {}

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.data.get(key, default)

    def set_bool(self, key: str, value: bool) -> None:
        self.data[key] = value


def _vm(names=("A", "B", "C"), deleter=None) -> MainVM:
    catalog = FakeCatalog([_item(n) for n in names])
    return MainVM(catalog, deleter or FakeDeleter(), FakePrefs())


def test_load_populates_active_without_touching_trash() -> None:
    vm = _vm()
    vm.load_photos_sync()
    assert [p.id for p in vm.photos] == ["A", "B", "C"]

    vm.move_to_trash(_item("A"))
    vm.catalog.items = [_item("D"), _item("B")]
    vm.load_photos_sync()

    assert [p.id for p in vm.photos] == ["D", "B"]
    assert [p.id for p in vm.trash_bin] == ["A"]


def test_stale_load_is_discarded() -> None:
    vm = _vm()
    first = vm.begin_load()
    second = vm.begin_load()

    assert vm.apply_catalog(first, [_item("OLD")]) is False
    assert vm.photos == ()
    assert vm.apply_catalog(second, [_item("NEW")]) is True
    assert [p.id for p in vm.photos] == ["NEW"]


def test_teardown_discards_in_flight_load() -> None:
    vm = _vm()
    token = vm.begin_load()
    vm.discard_pending_loads()
    assert vm.apply_catalog(token, [_item("A")]) is False
    assert vm.photos == ()


def test_purge_flow_granted() -> None:
    deleter = FakeDeleter()
    vm = _vm(deleter=deleter)
    vm.load_photos_sync()
    vm.move_to_trash(_item("B"))
    vm.move_to_trash(_item("A"))

    request = vm.request_purge()
    assert request is not None
    assert [p.id for p in request.items] == ["A", "B"]
    assert vm.purge_pending
    assert vm.request_purge() is None

    vm.finish_purge(PurgeOutcome.GRANTED, DeleteResult(list(request.locations), []))
    assert vm.trash_bin == ()
    assert not vm.purge_pending


def test_purge_flow_denied_keeps_trash() -> None:
    vm = _vm()
    vm.load_photos_sync()
    vm.move_to_trash(_item("A"))

    vm.request_purge()
    vm.finish_purge(PurgeOutcome.DENIED)

    assert [p.id for p in vm.trash_bin] == ["A"]
    assert not vm.purge_pending


def test_purge_partial_failure_keeps_failed_items() -> None:
    vm = _vm()
    vm.load_photos_sync()
    vm.move_to_trash(_item("A"))
    vm.move_to_trash(_item("B"))

    vm.request_purge()
    result = DeleteResult(["/photos/B.jpg"], [("/photos/A.jpg", "File does not exist")])
    vm.finish_purge(PurgeOutcome.GRANTED, result)

    assert [p.id for p in vm.trash_bin] == ["A"]


def test_request_build_failure_leaves_trash_unchanged() -> None:
    vm = _vm(deleter=FakeDeleter(fail=True))
    vm.load_photos_sync()
    vm.move_to_trash(_item("A"))

    assert vm.request_purge() is None
    assert [p.id for p in vm.trash_bin] == ["A"]
    assert not vm.purge_pending


def test_request_purge_with_empty_trash() -> None:
    vm = _vm()
    vm.load_photos_sync()
    assert vm.request_purge() is None


def test_keep_and_recover_delegate_to_state() -> None:
    vm = _vm()
    vm.load_photos_sync()
    vm.move_to_trash(_item("A"))
    vm.keep_photo(_item("B"))
    vm.recover_from_trash(_item("A"))

    assert [p.id for p in vm.photos] == ["A", "C"]
    assert vm.trash_bin == ()


def test_tutorial_flag() -> None:
    vm = _vm()
    assert vm.should_show_tutorial() is True
    vm.dismiss_tutorial()
    assert vm.should_show_tutorial() is False
    assert vm._prefs.data[FIRST_LAUNCH_KEY] is False  # pylint: disable=protected-access
