from __future__ import annotations

from typing import Any, Dict, Optional

from models import FieldBounds, MazeConfig
from utils import config_value

DEFAULT_FIELD = (390.0, 844.0)


def parse_maze_config(cfg: Dict[str, Any]) -> MazeConfig:
    """Parse maze generation settings from config data.

    Args:
        cfg: Whole config dict; settings are read from its "maze" section.

    Returns:
        MazeConfig with defaults applied.

    Raises:
        ValueError: If the clearance margin does not exceed the marble radius
            or the cell size is not positive.
    """
    raw = config_value(cfg, "maze", {})
    if not isinstance(raw, dict):
        raw = {}
    return MazeConfig.from_dict(raw)


def parse_field_bounds(
    cfg: Dict[str, Any],
    width: Optional[float] = None,
    height: Optional[float] = None,
) -> FieldBounds:
    """Resolve field bounds: explicit overrides first, then "field.width/height".

    Non-positive sizes are not corrected here; FieldBounds raises on them.
    """
    w = width if width is not None else config_value(cfg, "field.width", DEFAULT_FIELD[0], float)
    h = height if height is not None else config_value(cfg, "field.height", DEFAULT_FIELD[1], float)
    return FieldBounds(float(w), float(h))
