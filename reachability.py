from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Sequence, Set, Tuple

from models import FieldBounds, MazeConfig, MazeLayout, Point
from occupancy import Cell, OccupancyGrid, rasterize

logger = logging.getLogger(__name__)

OK = "ok"
OUT_OF_BOUNDS = "out_of_bounds"
START_BLOCKED = "start_blocked"
GOAL_BLOCKED = "goal_blocked"
UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class ReachabilityReport:
    ok: bool
    reason: str
    goal_index: Optional[int] = None  # offending goal, if any
    cells_explored: int = 0

    def __bool__(self) -> bool:
        return self.ok


class ReachabilityValidator:
    """Checks that every goal can be reached from the start through free cells."""

    def check(
        self,
        grid: OccupancyGrid,
        start: Point,
        goals: Sequence[Point],
        bounds: Optional[FieldBounds] = None,
    ) -> ReachabilityReport:
        if bounds is not None:
            if not bounds.contains(start):
                logger.debug("start %s lies outside the field", start)
                return ReachabilityReport(False, OUT_OF_BOUNDS)
            for index, goal in enumerate(goals):
                if not bounds.contains(goal):
                    logger.debug("goal %s %s lies outside the field", index, goal)
                    return ReachabilityReport(False, OUT_OF_BOUNDS, goal_index=index)

        start_cell = grid.cell_for(start)
        if not grid.is_passable(*start_cell):
            logger.debug("start %s is inside a wall clearance (cell %s)", start, start_cell)
            return ReachabilityReport(False, START_BLOCKED)

        goal_cells = [grid.cell_for(goal) for goal in goals]
        for index, cell in enumerate(goal_cells):
            if not grid.is_passable(*cell):
                logger.debug("goal %s is inside a wall clearance (cell %s)", index, cell)
                return ReachabilityReport(False, GOAL_BLOCKED, goal_index=index)

        explored_total = 0
        for index, cell in enumerate(goal_cells):
            found, explored = self._search(grid, start_cell, cell)
            explored_total += explored
            if not found:
                logger.debug("no path to goal %s after exploring %s cells", index, explored)
                return ReachabilityReport(
                    False, UNREACHABLE, goal_index=index, cells_explored=explored_total
                )
            logger.debug("path to goal %s found after exploring %s cells", index, explored)

        return ReachabilityReport(True, OK, cells_explored=explored_total)

    def is_reachable(
        self,
        grid: OccupancyGrid,
        start: Point,
        goals: Sequence[Point],
        bounds: Optional[FieldBounds] = None,
    ) -> bool:
        return self.check(grid, start, goals, bounds).ok

    def _search(self, grid: OccupancyGrid, start: Cell, goal: Cell) -> Tuple[bool, int]:
        q = deque([start])
        visited: Set[Cell] = {start}
        explored = 0

        while q:
            cell = q.popleft()
            explored += 1
            if cell == goal:
                return True, explored
            for nxt in grid.neighbors(*cell):
                if nxt not in visited:
                    visited.add(nxt)
                    q.append(nxt)
        return False, explored


def validate_layout(
    layout: MazeLayout,
    bounds: FieldBounds,
    config: Optional[MazeConfig] = None,
) -> ReachabilityReport:
    """Rasterize a layout and check all of its goals against its start."""
    bounds = FieldBounds.coerce(bounds)
    grid = rasterize(layout.walls, bounds, config)
    report = ReachabilityValidator().check(grid, layout.start, layout.goals, bounds)
    logger.debug(
        "level %s (%s): %s walls, %s goals -> %s",
        layout.level,
        layout.strategy,
        len(layout.walls),
        len(layout.goals),
        report.reason,
    )
    return report
