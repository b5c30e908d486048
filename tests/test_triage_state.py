from __future__ import annotations

import random

import pytest

from core.models import PhotoItem
from core.services.interfaces import PurgeOutcome
from core.services.triage_state import PurgeInProgressError, TriageError, TriageState


def _item(name: str) -> PhotoItem:
    return PhotoItem(id=name, location=f"/photos/{name}.jpg")


def _state(*names: str) -> TriageState:
    state = TriageState()
    state.replace_active([_item(n) for n in names])
    return state


def _ids(items) -> list[str]:
    return [it.id for it in items]


def test_trash_keep_recover_scenario() -> None:
    state = _state("A", "B", "C")
    a, b = _item("A"), _item("B")

    state.trash(a)
    assert _ids(state.active) == ["B", "C"]
    assert _ids(state.trashed) == ["A"]

    state.keep(b)
    assert _ids(state.active) == ["C"]
    assert _ids(state.trashed) == ["A"]

    state.recover(a)
    assert _ids(state.active) == ["A", "C"]
    assert state.trashed == ()


def test_trash_prepends_newest_first() -> None:
    state = _state("A", "B", "C")
    state.trash(_item("B"))
    state.trash(_item("A"))
    assert _ids(state.trashed) == ["A", "B"]


def test_trash_then_recover_restores_front_and_order() -> None:
    state = _state("A", "B", "C", "D")
    state.trash(_item("C"))
    state.recover(_item("C"))
    assert _ids(state.active) == ["C", "A", "B", "D"]

    state = _state("A", "B", "C", "D")
    state.trash(_item("A"))
    state.recover(_item("A"))
    assert _ids(state.active) == ["A", "B", "C", "D"]


def test_lists_never_overlap_under_random_operations() -> None:
    rng = random.Random(1234)
    state = _state(*[f"p{i}" for i in range(30)])
    for _ in range(500):
        op = rng.choice(["trash", "keep", "recover"])
        if op in ("trash", "keep") and state.active:
            getattr(state, op)(rng.choice(state.active))
        elif op == "recover" and state.trashed:
            state.recover(rng.choice(state.trashed))
        assert not set(_ids(state.active)) & set(_ids(state.trashed))


def test_preconditions_raise() -> None:
    state = _state("A")
    with pytest.raises(TriageError):
        state.recover(_item("A"))
    state.trash(_item("A"))
    with pytest.raises(TriageError):
        state.trash(_item("A"))
    with pytest.raises(TriageError):
        state.keep(_item("A"))


def test_purge_granted_empties_trash() -> None:
    state = _state("A", "B", "C")
    state.trash(_item("B"))
    state.trash(_item("A"))

    request = state.request_purge()
    assert _ids(request.items) == ["A", "B"]
    assert request.locations == ("/photos/A.jpg", "/photos/B.jpg")
    assert state.purge_pending

    state.complete_purge(PurgeOutcome.GRANTED)
    assert state.trashed == ()
    assert not state.purge_pending
    assert _ids(state.active) == ["C"]


@pytest.mark.parametrize("outcome", [PurgeOutcome.DENIED, PurgeOutcome.FAILED])
def test_purge_not_granted_keeps_trash(outcome: PurgeOutcome) -> None:
    state = _state("A", "B")
    state.trash(_item("A"))
    state.trash(_item("B"))
    before = state.trashed

    state.request_purge()
    state.complete_purge(outcome)
    assert state.trashed == before
    assert not state.purge_pending


def test_purge_granted_keeps_failed_deletes() -> None:
    state = _state("A", "B")
    state.trash(_item("A"))
    state.trash(_item("B"))
    state.request_purge()
    state.complete_purge(PurgeOutcome.GRANTED, failed_locations=["/photos/A.jpg"])
    assert _ids(state.trashed) == ["A"]


def test_purge_requires_items_and_single_flight() -> None:
    state = _state("A")
    with pytest.raises(TriageError):
        state.request_purge()
    with pytest.raises(TriageError):
        state.complete_purge(PurgeOutcome.GRANTED)

    state.trash(_item("A"))
    state.request_purge()
    with pytest.raises(PurgeInProgressError):
        state.request_purge()


def test_replace_active_keeps_trash_and_skips_trashed() -> None:
    state = _state("A", "B")
    state.trash(_item("A"))

    state.replace_active([_item("X"), _item("A"), _item("Y")])
    assert _ids(state.active) == ["X", "Y"]
    assert _ids(state.trashed) == ["A"]


def test_empty_view_reachable_with_non_empty_trash() -> None:
    state = _state("X")
    state.trash(_item("X"))
    assert state.is_empty
    assert _ids(state.trashed) == ["X"]
    assert state.front() == ()


def test_front_returns_first_two() -> None:
    state = _state("A", "B", "C")
    assert _ids(state.front()) == ["A", "B"]
    assert _ids(state.front(1)) == ["A"]


def test_snapshots_are_read_only() -> None:
    state = _state("A")
    assert isinstance(state.active, tuple)
    assert isinstance(state.trashed, tuple)


def test_purge_failures_match_unnormalized_locations() -> None:
    item = PhotoItem(id="A", location="/photos/sub/../A.jpg")
    state = TriageState()
    state.replace_active([item, _item("B")])
    state.trash(item)
    state.trash(_item("B"))
    state.request_purge()

    state.complete_purge(PurgeOutcome.GRANTED, failed_locations=["/photos/A.jpg"])

    assert _ids(state.trashed) == ["A"]
