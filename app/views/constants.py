"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

# Side panel
PANEL_WIDTH_PX: int = 320
LIST_PADDING_PX: int = 13

# Location view
LOCATION_MIN_HEIGHT_PX: int = 180
LOCATION_SPAN_DEG: float = 20.0  # longitude span shown across the view
LOCATION_GRID_STEP_DEG: float = 5.0
LOCATION_DOT_RADIUS_PX: int = 4

# Photo info label formats
EXPOSURE_FORMAT: str = "{} sec"
APERTURE_FORMAT: str = "f/{}"
FOCAL_FORMAT: str = "{} mm"
ISO_FORMAT: str = "ISO {}"

# Stack
STACK_BACKGROUND: str = "#101010"
