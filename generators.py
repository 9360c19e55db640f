"""
generators.py

Layout strategies:
- FixedGenerator: hand-authored opening levels (see fixed_levels.py)
- RandomizedGenerator: pseudo-random bars with a bounded retry budget
- FallbackGenerator: simple patterns cycled by level number, used when the
  randomized generator gives up or a fixed layout does not fit the field

Difficulty, time bonus and time limit curves live here as well; all of them
grow with the level and plateau at configured maxima.
"""

from __future__ import annotations

import dataclasses
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from fixed_levels import FIXED_LEVELS
from models import FieldBounds, MazeConfig, MazeLayout, Point, Wall
from occupancy import OccupancyGridBuilder
from reachability import ReachabilityReport, ReachabilityValidator
from utils import clamp

logger = logging.getLogger(__name__)


# ----------------------------
# Curves
# ----------------------------


def difficulty_for_level(level: int, config: Optional[MazeConfig] = None) -> float:
    curve = (config or MazeConfig()).difficulty
    raw = curve.base + curve.per_level * (max(1, level) - 1)
    return clamp(raw, curve.base, curve.maximum)


def time_bonus_for_level(level: int, config: Optional[MazeConfig] = None) -> int:
    curve = (config or MazeConfig()).time_bonus
    raw = curve.base + curve.per_level * (max(1, level) - 1)
    return clamp(raw, curve.base, curve.maximum)


def time_limit_for(level: int, goal_count: int, config: Optional[MazeConfig] = None) -> int:
    rule = (config or MazeConfig()).time_limit
    return rule.base + rule.per_goal * goal_count + int(level * rule.per_level)


def standard_start(bounds: FieldBounds, config: Optional[MazeConfig] = None) -> Point:
    inset = bounds.inset((config or MazeConfig()).edge_inset)
    return Point(inset, inset)


def standard_goals(
    bounds: FieldBounds, level: int, config: Optional[MazeConfig] = None
) -> List[Point]:
    """Goals for generated levels, one more per level up to the configured cap."""
    cfg = config or MazeConfig()
    w, h, inset = bounds.width, bounds.height, bounds.inset(cfg.edge_inset)
    ordered = [
        Point(w - inset, h - inset),
        Point(w / 2, h / 2),
        Point(inset, h - inset),
        Point(w - inset, inset),
    ]
    return ordered[: clamp(level, 1, cfg.max_goals)]


# ----------------------------
# Results
# ----------------------------


@dataclass(frozen=True)
class GenerationResult:
    layout: Optional[MazeLayout]
    attempts: int
    reason: str  # "ok" or the last validation failure
    last_candidate: Optional[MazeLayout] = None

    @property
    def ok(self) -> bool:
        return self.layout is not None


class _Validating:
    """Shared grid + BFS validation for strategies."""

    def __init__(self, config: Optional[MazeConfig] = None) -> None:
        self.config = config or MazeConfig()
        self.grids = OccupancyGridBuilder(self.config)
        self.validator = ReachabilityValidator()

    def validate(self, layout: MazeLayout, bounds: FieldBounds) -> ReachabilityReport:
        grid = self.grids.build(layout.walls, bounds)
        return self.validator.check(grid, layout.start, layout.goals, bounds)


# ----------------------------
# Fixed
# ----------------------------


class FixedGenerator:
    """Returns the authored layout for a fixed level, scaled to the field."""

    def __init__(self, config: Optional[MazeConfig] = None) -> None:
        self.config = config or MazeConfig()

    @property
    def levels(self) -> Sequence[int]:
        return sorted(n for n in FIXED_LEVELS if n <= self.config.fixed_level_count)

    def has_level(self, level: int) -> bool:
        return level in self.levels

    def generate(self, level: int, bounds: FieldBounds) -> MazeLayout:
        if not self.has_level(level):
            raise KeyError(f"No fixed layout for level {level}")
        return FIXED_LEVELS[level](bounds, self.config.wall_thickness)


# ----------------------------
# Randomized
# ----------------------------


class RandomizedGenerator(_Validating):
    def __init__(
        self, config: Optional[MazeConfig] = None, rng: Optional[random.Random] = None
    ) -> None:
        super().__init__(config)
        self.rng = rng or random.Random(self.config.seed)

    def generate(
        self,
        level: int,
        bounds: FieldBounds,
        difficulty: float,
        time_bonus: int,
    ) -> GenerationResult:
        start = standard_start(bounds, self.config)
        goals = standard_goals(bounds, level, self.config)
        time_limit = time_limit_for(level, len(goals), self.config)

        candidate: Optional[MazeLayout] = None
        reason = "not attempted"
        for attempt in range(1, self.config.max_attempts + 1):
            walls = self._candidate_walls(level, difficulty, bounds)
            walls = self._clear_around(walls, [start, *goals])
            candidate = MazeLayout(
                level=level,
                walls=walls,
                goals=goals,
                start=start,
                time_limit=time_limit,
                difficulty=difficulty,
                time_bonus=time_bonus,
                strategy="random",
            )
            report = self.validate(candidate, bounds)
            if report.ok:
                logger.debug("level %s: random layout valid on attempt %s", level, attempt)
                return GenerationResult(candidate, attempt, report.reason, candidate)
            reason = report.reason
            logger.debug("level %s: attempt %s rejected (%s)", level, attempt, reason)

        logger.info(
            "level %s: no valid random layout after %s attempts (last: %s)",
            level,
            self.config.max_attempts,
            reason,
        )
        return GenerationResult(None, self.config.max_attempts, reason, candidate)

    def _candidate_walls(self, level: int, difficulty: float, bounds: FieldBounds) -> List[Wall]:
        """Alternate horizontal and vertical bars on evenly spaced lines.

        Odd lines are mirrored so consecutive bars leave gaps on opposite sides.
        """
        w, h, t = bounds.width, bounds.height, self.config.wall_thickness
        wall_count = int(6.0 + level * difficulty)
        lines = min(wall_count // 2 + 1, 6)

        walls: List[Wall] = []
        for i in range(1, lines):
            y = h * i / (lines + 1)
            length = w * self.rng.uniform(0.3, 0.6)
            x = w * self.rng.uniform(0.2, 0.8)
            walls.append(Wall.horizontal(x if i % 2 == 0 else w - x, y, length, t))

            x = w * i / (lines + 1)
            length = h * self.rng.uniform(0.3, 0.6)
            y = h * self.rng.uniform(0.2, 0.8)
            walls.append(Wall.vertical(x, y if i % 2 == 0 else h - y, length, t))
        return walls

    def _clear_around(self, walls: Sequence[Wall], points: Sequence[Point]) -> List[Wall]:
        safe = self.config.safe_distance
        return [w for w in walls if all(w.distance_to(p) >= safe for p in points)]


# ----------------------------
# Fallback
# ----------------------------


class FallbackGenerator(_Validating):
    """Deterministic safety net: a simple pattern, or an open field if even that fails."""

    PATTERNS = ("zigzag", "frame", "ladder")

    def pattern_for(self, level: int) -> str:
        return self.PATTERNS[level % 3]

    def pattern_walls(self, pattern: str, bounds: FieldBounds) -> List[Wall]:
        w, h, t = bounds.width, bounds.height, self.config.wall_thickness

        if pattern == "zigzag":
            # long bars with the gap switching sides every row
            return [
                Wall.horizontal(w * (0.35 if i % 2 else 0.65), h * i / 5, w * 0.7, t)
                for i in range(1, 5)
            ]

        if pattern == "frame":
            # box around the centre with open corners
            return [
                Wall.horizontal(w / 2, h * 0.25, w * 0.7, t),
                Wall.horizontal(w / 2, h * 0.75, w * 0.7, t),
                Wall.vertical(w * 0.25, h / 2, h * 0.3, t),
                Wall.vertical(w * 0.75, h / 2, h * 0.3, t),
            ]

        if pattern == "ladder":
            walls: List[Wall] = []
            for i in range(1, 4):
                y = h * i / 4
                walls.append(Wall.horizontal(w * 0.175, y, w * 0.35, t))
                walls.append(Wall.horizontal(w * 0.825, y, w * 0.35, t))
            return walls

        raise ValueError(f"Unknown fallback pattern: {pattern!r}")

    def generate(self, template: MazeLayout, bounds: FieldBounds) -> MazeLayout:
        """Re-wall `template` (keeping start, goals and timing) with a safe pattern."""
        pattern = self.pattern_for(template.level)
        layout = dataclasses.replace(
            template, walls=tuple(self.pattern_walls(pattern, bounds)), strategy="fallback"
        )
        report = self.validate(layout, bounds)
        if report.ok:
            logger.info("level %s: using fallback pattern %s", template.level, pattern)
            return layout

        logger.warning(
            "level %s: fallback pattern %s does not fit %sx%s (%s), using open field",
            template.level,
            pattern,
            bounds.width,
            bounds.height,
            report.reason,
        )
        return dataclasses.replace(template, walls=(), strategy="open")
