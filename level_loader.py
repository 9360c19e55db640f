from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

import pygame

from models import Box, FieldBounds, Level, MazeConfig, MazeLayout, Point, Wall


def box_to_rect(box: Box, field_height: float) -> pygame.Rect:
    """Convert a field box (y up) to a screen rect (y down), rounding outwards."""
    left = math.floor(box.left)
    top = math.floor(field_height - box.top)
    right = math.ceil(box.right)
    bottom = math.ceil(field_height - box.bottom)
    return pygame.Rect(left, top, right - left, bottom - top)


def build_level_from_layout(
    layout: MazeLayout,
    bounds: FieldBounds,
    config: Optional[MazeConfig] = None,
) -> Level:
    """Build the collision view (static walls, goal sensors, spawn) for a layout.

    Args:
        layout: A validated layout.
        bounds: Field the layout was generated for.
        config: Supplies the goal sensor radius.

    Returns:
        A populated Level instance in screen coordinates.
    """
    cfg = config or MazeConfig()
    h = bounds.height
    r = cfg.goal_radius

    solids: List[pygame.Rect] = [box_to_rect(wall.footprint(), h) for wall in layout.walls]
    goal_sensors: List[pygame.Rect] = [
        box_to_rect(Box(g.x - r, g.y - r, g.x + r, g.y + r), h) for g in layout.goals
    ]
    spawn_px = pygame.Vector2(layout.start.x, h - layout.start.y)

    return Level(
        number=layout.level,
        solids=solids,
        goal_sensors=goal_sensors,
        spawn_px=spawn_px,
        time_limit=layout.time_limit,
        time_bonus=layout.time_bonus,
    )


def layout_to_dict(layout: MazeLayout, bounds: Optional[FieldBounds] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "level": layout.level,
        "strategy": layout.strategy,
        "timeLimit": layout.time_limit,
        "difficulty": layout.difficulty,
        "timeBonus": layout.time_bonus,
        "start": [layout.start.x, layout.start.y],
        "goals": [[g.x, g.y] for g in layout.goals],
        "walls": [
            {
                "x": w.x,
                "y": w.y,
                "length": w.length,
                "orientation": w.orientation,
                "thickness": w.thickness,
            }
            for w in layout.walls
        ],
    }
    if bounds is not None:
        payload["field"] = {"width": bounds.width, "height": bounds.height}
    return payload


def _point(raw: Any) -> Point:
    if isinstance(raw, dict):
        return Point(float(raw["x"]), float(raw["y"]))
    return Point(float(raw[0]), float(raw[1]))


def layout_from_dict(raw: Dict[str, Any]) -> MazeLayout:
    """Rebuild a layout written by layout_to_dict.

    Raises:
        ValueError: If a required key is missing or a value is malformed.
    """
    try:
        walls = [
            Wall(
                x=float(w["x"]),
                y=float(w["y"]),
                length=float(w["length"]),
                orientation=str(w["orientation"]),
                thickness=float(w.get("thickness", 20.0)),
            )
            for w in raw.get("walls", [])
        ]
        return MazeLayout(
            level=int(raw["level"]),
            walls=walls,
            goals=[_point(g) for g in raw.get("goals", [])],
            start=_point(raw["start"]),
            time_limit=int(raw["timeLimit"]),
            difficulty=float(raw.get("difficulty", 1.0)),
            time_bonus=int(raw.get("timeBonus", 0)),
            strategy=str(raw.get("strategy", "fixed")),
        )
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Malformed layout data: {e!r}") from e


def write_layout(path: Path, layout: MazeLayout, bounds: Optional[FieldBounds] = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(layout_to_dict(layout, bounds), indent=2), encoding="utf-8")


def read_layout(path: Path) -> MazeLayout:
    """Read a layout JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Layout not found: {path}")
    return layout_from_dict(json.loads(path.read_text(encoding="utf-8")))
