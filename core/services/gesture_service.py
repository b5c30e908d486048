"""Swipe and zoom arithmetic shared by the card and preview widgets.

Kept free of Qt so the thresholds can be exercised without a display. The
triage state only ever sees the discrete `SwipeDecision`.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_SWIPE_THRESHOLD: float = 250.0
ROTATION_DIVISOR: float = 45.0
FADE_DISTANCE: float = 1200.0
MAX_FADE: float = 0.8
TINT_ALPHA: float = 0.2

MIN_ZOOM: float = 1.0
MAX_ZOOM: float = 5.0
DOUBLE_CLICK_ZOOM: float = 3.0


class SwipeDecision(Enum):
    TRASH = "trash"
    KEEP = "keep"
    CANCEL = "cancel"


def resolve_swipe(offset_x: float, threshold: float = DEFAULT_SWIPE_THRESHOLD) -> SwipeDecision:
    """Map a released drag offset to its outcome."""
    if offset_x > threshold:
        return SwipeDecision.KEEP
    if offset_x < -threshold:
        return SwipeDecision.TRASH
    return SwipeDecision.CANCEL


def card_rotation(offset_x: float) -> float:
    """Rotation in degrees for a card dragged by `offset_x` pixels."""
    return offset_x / ROTATION_DIVISOR


def card_opacity(offset_x: float) -> float:
    fade = min(max(abs(offset_x) / FADE_DISTANCE, 0.0), MAX_FADE)
    return 1.0 - fade


def overlay_tint(
    offset_x: float, threshold: float = DEFAULT_SWIPE_THRESHOLD
) -> tuple[int, int, int, float]:
    """RGBA tint drawn over the card: green to keep, red to trash."""
    decision = resolve_swipe(offset_x, threshold)
    if decision is SwipeDecision.KEEP:
        return (0, 255, 0, TINT_ALPHA)
    if decision is SwipeDecision.TRASH:
        return (255, 0, 0, TINT_ALPHA)
    return (0, 0, 0, 0.0)


def clamp_zoom(scale: float) -> float:
    return min(max(scale, MIN_ZOOM), MAX_ZOOM)


def toggle_zoom(scale: float) -> float:
    """Double-click behaviour: zoomed in resets, otherwise jump to 3x."""
    return MIN_ZOOM if scale > MIN_ZOOM else DOUBLE_CLICK_ZOOM
