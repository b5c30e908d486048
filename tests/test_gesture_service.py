from __future__ import annotations

import pytest

from core.services.gesture_service import (
    SwipeDecision,
    card_opacity,
    card_rotation,
    clamp_zoom,
    overlay_tint,
    resolve_swipe,
    toggle_zoom,
)


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (251.0, SwipeDecision.KEEP),
        (250.0, SwipeDecision.CANCEL),
        (0.0, SwipeDecision.CANCEL),
        (-250.0, SwipeDecision.CANCEL),
        (-251.0, SwipeDecision.TRASH),
    ],
)
def test_resolve_swipe_threshold(offset: float, expected: SwipeDecision) -> None:
    assert resolve_swipe(offset, 250.0) is expected


def test_card_transform() -> None:
    assert card_rotation(90.0) == pytest.approx(2.0)
    assert card_opacity(0.0) == pytest.approx(1.0)
    assert card_opacity(-600.0) == pytest.approx(0.5)
    assert card_opacity(5000.0) == pytest.approx(0.2)


def test_overlay_tint() -> None:
    assert overlay_tint(300.0) == (0, 255, 0, 0.2)
    assert overlay_tint(-300.0) == (255, 0, 0, 0.2)
    assert overlay_tint(10.0)[3] == 0.0


def test_zoom_helpers() -> None:
    assert clamp_zoom(0.5) == 1.0
    assert clamp_zoom(9.0) == 5.0
    assert toggle_zoom(1.0) == 3.0
    assert toggle_zoom(2.5) == 1.0
