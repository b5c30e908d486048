from __future__ import annotations

import csv
import os
from pathlib import Path

import pytest

from core.models import PhotoItem
from core.services.interfaces import PurgeRequest
from infrastructure import delete_service as delete_module
from infrastructure.delete_service import DeleteRequestError, DeleteService


@pytest.fixture
def recycled(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    calls: list[str] = []

    def _fake_send2trash(path: str) -> None:
        calls.append(path)
        os.remove(path)

    monkeypatch.setattr(delete_module, "send2trash", _fake_send2trash)
    return calls


def _photo(path: Path) -> PhotoItem:
    path.write_bytes(b"img")
    return PhotoItem.from_path(str(path))


def test_build_request_normalizes_locations(tmp_path: Path) -> None:
    item = _photo(tmp_path / "a.jpg")
    raw = PurgeRequest(items=(item,), locations=(str(tmp_path / "x" / ".." / "a.jpg"),))

    request = DeleteService().build_request(raw)

    assert request.locations == (os.path.normpath(str(tmp_path / "a.jpg")),)
    assert request.items == (item,)


def test_build_request_rejects_empty() -> None:
    with pytest.raises(DeleteRequestError):
        DeleteService().build_request(PurgeRequest(items=(), locations=()))


def test_build_request_rejects_duplicates(tmp_path: Path) -> None:
    item = _photo(tmp_path / "a.jpg")
    raw = PurgeRequest(items=(item, item), locations=(item.location, item.location))
    with pytest.raises(DeleteRequestError):
        DeleteService().build_request(raw)


def test_delete_to_recycle_reports_missing(tmp_path: Path, recycled: list[str]) -> None:
    present = _photo(tmp_path / "a.jpg")
    missing = str(tmp_path / "gone.jpg")

    result = DeleteService().delete_to_recycle([present.location, missing])

    assert result.success_paths == [present.location]
    assert result.failed_paths == [missing]
    assert recycled == [os.path.normpath(present.location)]
    assert not os.path.exists(present.location)


def test_delete_to_recycle_records_os_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    item = _photo(tmp_path / "locked.jpg")

    def _refuse(path: str) -> None:
        raise OSError("permission denied")

    monkeypatch.setattr(delete_module, "send2trash", _refuse)
    result = DeleteService().delete_to_recycle([item.location])

    assert result.success_paths == []
    assert result.failed[0][0] == item.location
    assert "permission denied" in result.failed[0][1]


def test_execute_delete_writes_audit_log(tmp_path: Path, recycled: list[str]) -> None:
    a = _photo(tmp_path / "a.jpg")
    b = PhotoItem.from_path(str(tmp_path / "b.jpg"))  # never created
    service = DeleteService(log_dir=str(tmp_path / "logs"))
    request = service.build_request(PurgeRequest.for_items((a, b)))

    result = service.execute_delete(request)

    assert result.log_path is not None
    with open(result.log_path, encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["PhotoId", "FilePath", "Success", "Reason"]
    assert rows[1] == [a.id, a.location, "1", ""]
    assert rows[2][:3] == [b.id, b.location, "0"]
    assert len(recycled) == 1
