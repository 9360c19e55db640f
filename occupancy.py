"""
occupancy.py

Rasterizes continuous wall geometry into a passable/blocked cell grid.

Field coordinates have the origin in the bottom-left corner with y growing
upwards, so row 0 is the bottom strip of the field. Every wall is grown by the
clearance margin before it is rasterized; a cell is blocked when its square
overlaps that grown footprint (touching edges do not block).
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from models import Box, FieldBounds, MazeConfig, Point, Wall

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]  # (row, col)

NEIGHBOR_STEPS: Tuple[Cell, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


class OccupancyGrid:
    def __init__(self, rows: int, cols: int, cell_size: float) -> None:
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size
        self.cells: List[List[bool]] = [[True for _ in range(cols)] for _ in range(rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_passable(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row][col]

    def block(self, row: int, col: int) -> None:
        if self.in_bounds(row, col):
            self.cells[row][col] = False

    def cell_for(self, point: Point) -> Cell:
        """Map a field point to its containing cell, clamped to the grid.

        A point on the far field edge (x == width) would floor to one past the
        last column, so it is clamped back into the edge cell.
        """
        col = int(math.floor(point.x / self.cell_size))
        row = int(math.floor(point.y / self.cell_size))
        return (
            min(max(row, 0), self.rows - 1),
            min(max(col, 0), self.cols - 1),
        )

    def cell_box(self, row: int, col: int) -> Box:
        s = self.cell_size
        return Box(left=col * s, bottom=row * s, right=(col + 1) * s, top=(row + 1) * s)

    def neighbors(self, row: int, col: int) -> Iterator[Cell]:
        for dr, dc in NEIGHBOR_STEPS:
            nr, nc = row + dr, col + dc
            if self.is_passable(nr, nc):
                yield (nr, nc)

    def blocked_count(self) -> int:
        return sum(1 for line in self.cells for free in line if not free)

    def to_rows(self, marks: Optional[Iterable[Tuple[Cell, str]]] = None) -> List[str]:
        """ASCII dump, top row first: '.' free, '#' blocked, plus optional marks."""
        grid = [["." if free else "#" for free in line] for line in self.cells]
        for (row, col), ch in marks or ():
            if self.in_bounds(row, col):
                grid[row][col] = ch
        return ["".join(line) for line in reversed(grid)]


def _span(lo: float, hi: float, cell_size: float, count: int) -> Optional[Tuple[int, int]]:
    """Inclusive index range of cells whose interval strictly overlaps (lo, hi)."""
    first = max(0, int(math.floor(lo / cell_size)))
    last = min(count - 1, int(math.ceil(hi / cell_size)) - 1)
    if first > last:
        return None
    return first, last


class OccupancyGridBuilder:
    """Builds an OccupancyGrid from walls, field bounds and clearance settings."""

    def __init__(self, config: Optional[MazeConfig] = None) -> None:
        self.config = config or MazeConfig()

    def grid_shape(self, bounds: FieldBounds) -> Tuple[int, int]:
        s = self.config.cell_size
        rows = max(1, int(math.floor(bounds.height / s)))
        cols = max(1, int(math.floor(bounds.width / s)))
        return rows, cols

    def build(self, walls: Sequence[Wall], bounds: FieldBounds) -> OccupancyGrid:
        rows, cols = self.grid_shape(bounds)
        grid = OccupancyGrid(rows, cols, self.config.cell_size)

        for index, wall in enumerate(walls):
            blocked = self._stamp(grid, wall.footprint(self.config.clearance_margin))
            logger.debug(
                "wall %s %s at (%.1f, %.1f) len=%.1f blocked %s cells",
                index,
                wall.orientation,
                wall.x,
                wall.y,
                wall.length,
                blocked,
            )
        return grid

    def _stamp(self, grid: OccupancyGrid, footprint: Box) -> int:
        s = grid.cell_size
        col_span = _span(footprint.left, footprint.right, s, grid.cols)
        row_span = _span(footprint.bottom, footprint.top, s, grid.rows)
        if col_span is None or row_span is None:
            return 0

        blocked = 0
        for row in range(row_span[0], row_span[1] + 1):
            for col in range(col_span[0], col_span[1] + 1):
                if grid.cells[row][col]:
                    grid.cells[row][col] = False
                    blocked += 1
        return blocked


def rasterize(
    walls: Sequence[Wall],
    bounds: FieldBounds,
    config: Optional[MazeConfig] = None,
) -> OccupancyGrid:
    """Pure function form of OccupancyGridBuilder.build."""
    bounds = FieldBounds.coerce(bounds)
    return OccupancyGridBuilder(config).build(walls, bounds)
