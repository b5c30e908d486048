"""
UI/view constants centralized for reuse across view modules.

Only magic numbers, colours and user-visible strings live here; swipe and
zoom arithmetic is in `core.services.gesture_service`.
"""

from __future__ import annotations

# Card stack
VISIBLE_CARD_COUNT: int = 2
CARD_MARGIN_PX: int = 20
CARD_CORNER_RADIUS_PX: int = 24
DEFAULT_CARD_SIZE: int = 1024  # overridable by settings.json "thumbnail_size"

# Swipe animation
FLING_DISTANCE_PX: int = 1500
FLING_DURATION_MS: int = 300
SNAP_BACK_DURATION_MS: int = 200

# Trash grid
TRASH_GRID_COLUMNS: int = 3
TRASH_TILE_PADDING_PX: int = 2
TRASH_TILE_CORNER_RADIUS_PX: int = 8
TRASH_THUMB_SIZE: int = 256

# Screen indices in the main stacked widget
SCREEN_PERMISSION: int = 0
SCREEN_MAIN: int = 1
SCREEN_TRASH: int = 2

# Colours
ERROR_COLOR: str = "#b00020"
OVERLAY_BACKGROUND: str = "rgba(0, 0, 0, 217)"

APP_TITLE: str = "PhotoDeleter"
