"""
level_selector.py

Single entry point used by the level-loading code: map a level number and the
play field to a layout that has passed the reachability check. On fields too
small for any wall pattern that layout is the open field. Maze quality
problems are never raised to the caller; only invalid field bounds are.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from generators import (
    FallbackGenerator,
    FixedGenerator,
    RandomizedGenerator,
    difficulty_for_level,
    time_bonus_for_level,
)
from models import FieldBounds, MazeConfig, MazeLayout
from reachability import validate_layout

logger = logging.getLogger(__name__)


class LevelSelector:
    """Picks a generation strategy per level range and returns a validated layout."""

    def __init__(
        self, config: Optional[MazeConfig] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.config = config or MazeConfig()
        self.rng = rng or random.Random(self.config.seed)

        self.fixed = FixedGenerator(self.config)
        self.randomized = RandomizedGenerator(self.config, self.rng)
        self.fallback = FallbackGenerator(self.config)

        self.strategies: Dict[str, Callable[[int, FieldBounds], MazeLayout]] = {
            "fixed": self._select_fixed,
            "random": self._select_random,
        }
        levels = self.fixed.levels
        self.strategy_table: Sequence[Tuple[range, str]] = (
            ((range(levels[0], levels[-1] + 1), "fixed"),) if levels else ()
        )

    def strategy_for(self, level: int) -> str:
        for levels, name in self.strategy_table:
            if level in levels:
                return name
        return "random"

    def select_layout(self, level: int, bounds: Any) -> MazeLayout:
        """Return the layout for `level` on a field of `bounds` (width, height).

        Raises:
            InvalidFieldBounds: If width or height is not positive.
            ValueError: If level is below 1.
        """
        bounds = FieldBounds.coerce(bounds)
        if int(level) != level or level < 1:
            raise ValueError(f"Level must be a positive integer, got {level!r}")
        level = int(level)

        name = self.strategy_for(level)
        logger.debug(
            "selecting level %s on %sx%s via %s", level, bounds.width, bounds.height, name
        )
        layout = self.strategies[name](level, bounds)

        report = validate_layout(layout, bounds, self.config)
        if not report.ok:
            logger.error(
                "level %s: no layout validates on %sx%s (%s); returning %s layout",
                level,
                bounds.width,
                bounds.height,
                report.reason,
                layout.strategy,
            )
        return layout

    def _select_fixed(self, level: int, bounds: FieldBounds) -> MazeLayout:
        layout = self.fixed.generate(level, bounds)
        report = validate_layout(layout, bounds, self.config)
        if report.ok:
            return layout

        logger.warning(
            "level %s: fixed layout fails on %sx%s (%s, goal %s)",
            level,
            bounds.width,
            bounds.height,
            report.reason,
            report.goal_index,
        )
        return self.fallback.generate(layout, bounds)

    def _select_random(self, level: int, bounds: FieldBounds) -> MazeLayout:
        difficulty = difficulty_for_level(level, self.config)
        time_bonus = time_bonus_for_level(level, self.config)

        result = self.randomized.generate(level, bounds, difficulty, time_bonus)
        if result.layout is not None:
            return result.layout
        return self.fallback.generate(result.last_candidate, bounds)


def select_layout(
    level: int,
    bounds: Any,
    config: Optional[MazeConfig] = None,
    rng: Optional[random.Random] = None,
) -> MazeLayout:
    """Convenience wrapper around LevelSelector for one-off calls."""
    return LevelSelector(config, rng).select_layout(level, bounds)
