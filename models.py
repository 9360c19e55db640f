from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pygame

from utils import clamp

HORIZONTAL = "horizontal"
VERTICAL = "vertical"
ORIENTATIONS = (HORIZONTAL, VERTICAL)

DEFAULT_WALL_THICKNESS = 20.0


class InvalidFieldBounds(ValueError):
    """Raised when the play field has a non-positive (or non-finite) side."""


def require_valid_bounds(width: float, height: float) -> None:
    """Fail loudly when no occupancy grid can be built for these bounds."""
    for name, value in (("width", width), ("height", height)):
        try:
            ok = math.isfinite(value) and value > 0
        except TypeError:
            ok = False
        if not ok:
            raise InvalidFieldBounds(
                f"Field {name} must be a positive number, got {value!r} "
                f"(bounds {width!r} x {height!r})"
            )


@dataclass(frozen=True)
class FieldBounds:
    width: float
    height: float

    def __post_init__(self) -> None:
        require_valid_bounds(self.width, self.height)

    @classmethod
    def coerce(cls, value: Any) -> "FieldBounds":
        """Accept FieldBounds or a (width, height) pair."""
        if isinstance(value, FieldBounds):
            return value
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls(float(value[0]), float(value[1]))
        raise InvalidFieldBounds(f"Expected (width, height), got {value!r}")

    def contains(self, point: "Point") -> bool:
        """True when the point lies strictly inside the field; edges are outside."""
        return 0.0 < point.x < self.width and 0.0 < point.y < self.height

    def inset(self, preferred: float) -> float:
        """Distance of start and goal points from the edges.

        Capped at a quarter of the shorter side so that on small fields the
        points stay strictly inside and never coincide.
        """
        return min(preferred, self.width / 4, self.height / 4)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in field coordinates (y grows upwards)."""

    left: float
    bottom: float
    right: float
    top: float

    def intersects(self, other: "Box") -> bool:
        # touching edges do not count as overlap
        return (
            self.left < other.right
            and other.left < self.right
            and self.bottom < other.top
            and other.bottom < self.top
        )

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.bottom <= point.y <= self.top

    def distance_to(self, point: Point) -> float:
        dx = max(self.left - point.x, 0.0, point.x - self.right)
        dy = max(self.bottom - point.y, 0.0, point.y - self.top)
        return math.hypot(dx, dy)


@dataclass(frozen=True)
class Wall:
    x: float
    y: float
    length: float
    orientation: str  # horizontal|vertical
    thickness: float = DEFAULT_WALL_THICKNESS

    def __post_init__(self) -> None:
        if self.orientation not in ORIENTATIONS:
            raise ValueError(f"Unknown wall orientation: {self.orientation!r}")
        if not self.length > 0:
            raise ValueError(f"Wall length must be positive, got {self.length!r}")

    @classmethod
    def horizontal(
        cls, x: float, y: float, length: float, thickness: float = DEFAULT_WALL_THICKNESS
    ) -> "Wall":
        return cls(x=x, y=y, length=length, orientation=HORIZONTAL, thickness=thickness)

    @classmethod
    def vertical(
        cls, x: float, y: float, length: float, thickness: float = DEFAULT_WALL_THICKNESS
    ) -> "Wall":
        return cls(x=x, y=y, length=length, orientation=VERTICAL, thickness=thickness)

    @property
    def is_horizontal(self) -> bool:
        return self.orientation == HORIZONTAL

    @property
    def width(self) -> float:
        return self.length if self.is_horizontal else self.thickness

    @property
    def height(self) -> float:
        return self.thickness if self.is_horizontal else self.length

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)

    def footprint(self, margin: float = 0.0) -> Box:
        """Return the wall rectangle grown by `margin` on every side."""
        half_w = self.width / 2 + margin
        half_h = self.height / 2 + margin
        return Box(
            left=self.x - half_w,
            bottom=self.y - half_h,
            right=self.x + half_w,
            top=self.y + half_h,
        )

    def distance_to(self, point: Point) -> float:
        return self.footprint().distance_to(point)


@dataclass(frozen=True)
class MazeLayout:
    level: int
    walls: Tuple[Wall, ...]
    goals: Tuple[Point, ...]
    start: Point
    time_limit: int
    difficulty: float
    time_bonus: int
    strategy: str = "fixed"  # fixed|random|fallback|open

    def __post_init__(self) -> None:
        # lists are accepted for convenience but stored as tuples
        object.__setattr__(self, "walls", tuple(self.walls))
        object.__setattr__(self, "goals", tuple(self.goals))
        if self.level < 1:
            raise ValueError(f"Layout level must be positive, got {self.level!r}")
        if self.time_limit <= 0:
            raise ValueError(f"Layout time limit must be positive, got {self.time_limit!r}")
        if self.time_bonus < 0:
            raise ValueError(f"Layout time bonus must not be negative, got {self.time_bonus!r}")


@dataclass
class Level:
    """Runtime collision view handed to the physics/render collaborator."""

    number: int
    solids: List[pygame.Rect]
    goal_sensors: List[pygame.Rect]
    spawn_px: pygame.Vector2
    time_limit: int
    time_bonus: int


# ----------------------------
# Config
# ----------------------------


@dataclass(frozen=True)
class DifficultyCurve:
    base: float = 1.0
    per_level: float = 0.5
    maximum: float = 5.0


@dataclass(frozen=True)
class TimeBonusCurve:
    base: int = 10
    per_level: int = 5
    maximum: int = 50


@dataclass(frozen=True)
class TimeLimitRule:
    base: int = 30
    per_goal: int = 10
    per_level: float = 2.0


@dataclass(frozen=True)
class MazeConfig:
    cell_size: float = 10.0
    wall_thickness: float = DEFAULT_WALL_THICKNESS
    clearance_margin: float = 15.0
    marble_radius: float = 10.0
    goal_radius: float = 25.0
    edge_inset: float = 50.0
    safe_distance: float = 60.0
    max_attempts: int = 20
    max_goals: int = 4
    fixed_level_count: int = 5
    seed: Optional[int] = None
    difficulty: DifficultyCurve = field(default_factory=DifficultyCurve)
    time_bonus: TimeBonusCurve = field(default_factory=TimeBonusCurve)
    time_limit: TimeLimitRule = field(default_factory=TimeLimitRule)

    def __post_init__(self) -> None:
        if not self.cell_size > 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size!r}")
        if not self.edge_inset > 0:
            raise ValueError(f"edge_inset must be positive, got {self.edge_inset!r}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts!r}")
        if not self.clearance_margin > self.marble_radius:
            raise ValueError(
                "clearance_margin must exceed the marble radius "
                f"({self.clearance_margin!r} <= {self.marble_radius!r})"
            )

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "MazeConfig":
        dc = raw.get("difficulty", {}) if isinstance(raw.get("difficulty"), dict) else {}
        tb = raw.get("time_bonus", {}) if isinstance(raw.get("time_bonus"), dict) else {}
        tl = raw.get("time_limit", {}) if isinstance(raw.get("time_limit"), dict) else {}
        seed = raw.get("seed")

        return MazeConfig(
            cell_size=float(raw.get("cell_size", 10.0)),
            wall_thickness=clamp(float(raw.get("wall_thickness", 20.0)), 1.0, 200.0),
            clearance_margin=float(raw.get("clearance_margin", 15.0)),
            marble_radius=float(raw.get("marble_radius", 10.0)),
            goal_radius=clamp(float(raw.get("goal_radius", 25.0)), 1.0, 200.0),
            edge_inset=clamp(float(raw.get("edge_inset", 50.0)), 1.0, 1000.0),
            safe_distance=clamp(float(raw.get("safe_distance", 60.0)), 0.0, 1000.0),
            max_attempts=clamp(int(raw.get("max_attempts", 20)), 1, 1000),
            max_goals=clamp(int(raw.get("max_goals", 4)), 1, 4),
            fixed_level_count=clamp(int(raw.get("fixed_level_count", 5)), 0, 5),
            seed=None if seed is None else int(seed),
            difficulty=DifficultyCurve(
                base=float(dc.get("base", 1.0)),
                per_level=max(0.0, float(dc.get("per_level", 0.5))),
                maximum=float(dc.get("maximum", 5.0)),
            ),
            time_bonus=TimeBonusCurve(
                base=max(0, int(tb.get("base", 10))),
                per_level=max(0, int(tb.get("per_level", 5))),
                maximum=max(0, int(tb.get("maximum", 50))),
            ),
            time_limit=TimeLimitRule(
                base=max(1, int(tl.get("base", 30))),
                per_goal=max(0, int(tl.get("per_goal", 10))),
                per_level=max(0.0, float(tl.get("per_level", 2.0))),
            ),
        )
