"""
fixed_levels.py

Hand-authored layouts for the opening levels.

Walls are placed as fractions of the field so the layouts stretch with the
screen; start and goal points sit EDGE from the field edges (less on fields
narrower than four times that). All five were authored against a
390 x 844 portrait field and every goal there is reachable with at least a
three-cell corridor at the default clearance.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from models import FieldBounds, MazeLayout, Point, Wall

EDGE = 50.0

LevelFactory = Callable[[FieldBounds, float], MazeLayout]


def _level_1(b: FieldBounds, t: float) -> MazeLayout:
    """Two offset bars and two posts."""
    w, h, e = b.width, b.height, b.inset(EDGE)
    walls = [
        Wall.horizontal(w / 2, h / 3, w / 2, t),
        Wall.horizontal(w / 4, h * 2 / 3, w / 2, t),
        Wall.vertical(w / 3, h / 2, h / 3, t),
        Wall.vertical(w * 2 / 3, h / 2, h / 3, t),
    ]
    return MazeLayout(
        level=1,
        walls=walls,
        goals=[Point(w - e, h - e)],
        start=Point(e, e),
        time_limit=30,
        difficulty=1.0,
        time_bonus=10,
    )


def _level_2(b: FieldBounds, t: float) -> MazeLayout:
    """Switchback: bars with gaps on alternating sides, centre goal."""
    w, h, e = b.width, b.height, b.inset(EDGE)
    walls = [
        # top bar, gap on the right
        Wall.horizontal(w * 0.3, h * 0.85, w * 0.6, t),
        # bottom bar, gap on the left
        Wall.horizontal(w * 0.7, h * 0.15, w * 0.6, t),
        # lower divider, gap on the right
        Wall.horizontal(w * 0.25, h * 0.4, w * 0.5, t),
        Wall.vertical(w * 0.25, h * 0.65, h * 0.4, t),
        Wall.vertical(w * 0.75, h * 0.35, h * 0.4, t),
    ]
    return MazeLayout(
        level=2,
        walls=walls,
        goals=[Point(w - e, h - e), Point(w / 2, h / 2)],
        start=Point(e, e),
        time_limit=45,
        difficulty=1.5,
        time_bonus=15,
    )


def _level_3(b: FieldBounds, t: float) -> MazeLayout:
    """Walled courtyard; the goals sit in the corners outside it."""
    w, h, e = b.width, b.height, b.inset(EDGE)
    walls = [
        # frame
        Wall.horizontal(w / 2, h / 6, w * 0.8, t),
        Wall.horizontal(w / 2, h * 5 / 6, w * 0.8, t),
        Wall.vertical(w / 6, h / 2, h * 0.8, t),
        Wall.vertical(w * 5 / 6, h / 2, h * 0.8, t),
        # courtyard
        Wall.horizontal(w / 3, h / 3, w / 6, t),
        Wall.horizontal(w * 2 / 3, h / 3, w / 6, t),
        Wall.horizontal(w / 3, h * 2 / 3, w / 6, t),
        Wall.horizontal(w * 2 / 3, h * 2 / 3, w / 6, t),
        Wall.vertical(w / 3, h / 2, h / 6, t),
        Wall.vertical(w * 2 / 3, h / 2, h / 6, t),
        # centre cross
        Wall.horizontal(w / 2, h / 2, w / 4, t),
        Wall.vertical(w / 2, h / 2, h / 4, t),
    ]
    return MazeLayout(
        level=3,
        walls=walls,
        goals=[
            Point(w - e, h - e),
            Point(e, h - e),
            Point(w - e, e),
        ],
        start=Point(e, e),
        time_limit=60,
        difficulty=2.0,
        time_bonus=20,
    )


def _level_4(b: FieldBounds, t: float) -> MazeLayout:
    """Nested chambers: one way into the ring, one way up each floor."""
    w, h, e = b.width, b.height, b.inset(EDGE)
    walls: List[Wall] = [
        # outer ring, entrance low on the left, exit high on the right
        Wall.horizontal(w * 0.5, h * 0.2, w * 0.6, t),
        Wall.horizontal(w * 0.4, h * 0.8, w * 0.4, t),
        Wall.vertical(w * 0.2, h * 0.55, h * 0.5, t),
        Wall.vertical(w * 0.8, h * 0.5, h * 0.6, t),
        # inner floors with gaps on opposite sides
        Wall.horizontal(w * 0.375, h * 0.4, w * 0.35, t),
        Wall.horizontal(w * 0.625, h * 0.6, w * 0.35, t),
    ]
    return MazeLayout(
        level=4,
        walls=walls,
        goals=[
            Point(w / 2, h / 2),
            Point(w - e, h - e),
            Point(e, h - e),
            Point(w - e, e),
        ],
        start=Point(e, e),
        time_limit=75,
        difficulty=2.5,
        time_bonus=25,
    )


def _level_5(b: FieldBounds, t: float) -> MazeLayout:
    """Coil: enter from the right, run left, climb into the core."""
    w, h, e = b.width, b.height, b.inset(EDGE)
    walls: List[Wall] = [
        Wall.vertical(w * 0.25, h * 0.5, h * 0.7, t),
        Wall.horizontal(w * 0.5, h * 0.85, w * 0.5, t),
        Wall.vertical(w * 0.75, h * 0.6, h * 0.5, t),
        Wall.horizontal(w * 0.5, h * 0.15, w * 0.5, t),
        # inner turn, leaves a gap next to the left wall
        Wall.horizontal(w * 0.6, h * 0.35, w * 0.3, t),
        # baffle inside the core
        Wall.horizontal(w * 0.625, h * 0.6, w * 0.25, t),
    ]
    return MazeLayout(
        level=5,
        walls=walls,
        goals=[
            Point(w / 2, h / 2),
            Point(w / 2, h * 0.25),
            Point(w - e, h - e),
            Point(e, h - e),
            Point(w - e, e),
        ],
        start=Point(e, e),
        time_limit=90,
        difficulty=3.0,
        time_bonus=30,
    )


FIXED_LEVELS: Dict[int, LevelFactory] = {
    1: _level_1,
    2: _level_2,
    3: _level_3,
    4: _level_4,
    5: _level_5,
}
