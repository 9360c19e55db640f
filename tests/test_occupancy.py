import pytest

from models import FieldBounds, InvalidFieldBounds, MazeConfig, Point, Wall
from occupancy import rasterize


def test_grid_shape_floors_field_size():
    grid = rasterize([], FieldBounds(390, 844))

    assert (grid.rows, grid.cols) == (84, 39)
    assert grid.blocked_count() == 0


def test_tiny_field_still_has_one_cell():
    grid = rasterize([], FieldBounds(4, 4))

    assert (grid.rows, grid.cols) == (1, 1)


def test_wall_blocks_cells_under_its_grown_footprint():
    # footprint 25..75 on both axes -> cells 2..7
    grid = rasterize([Wall.horizontal(50, 50, 20)], FieldBounds(100, 100))

    assert grid.blocked_count() == 36
    assert not grid.is_passable(2, 2)
    assert not grid.is_passable(7, 7)
    assert grid.is_passable(1, 5)
    assert grid.is_passable(8, 5)


def test_cells_touching_the_footprint_stay_free():
    # footprint x 20..80 lands exactly on cell edges
    grid = rasterize([Wall.horizontal(50, 50, 30)], FieldBounds(100, 100))

    assert grid.is_passable(5, 1)
    assert not grid.is_passable(5, 2)
    assert not grid.is_passable(5, 7)
    assert grid.is_passable(5, 8)


def test_walls_outside_the_field_are_clipped():
    grid = rasterize([Wall.vertical(-100, 50, 40)], FieldBounds(100, 100))

    assert grid.blocked_count() == 0


def test_margin_is_configurable():
    cfg = MazeConfig(clearance_margin=25, marble_radius=10)
    grid = rasterize([Wall.horizontal(50, 50, 20)], FieldBounds(100, 100), cfg)

    # footprint 15..85 -> cells 1..8
    assert grid.blocked_count() == 64


def test_points_on_cell_and_field_edges_map_in_range():
    grid = rasterize([], FieldBounds(390, 844))

    assert grid.cell_for(Point(20, 30)) == (3, 2)
    assert grid.cell_for(Point(0, 0)) == (0, 0)
    assert grid.cell_for(Point(390, 844)) == (83, 38)
    assert grid.cell_for(Point(-5, 900)) == (83, 0)


def test_out_of_range_cells_are_not_passable():
    grid = rasterize([], FieldBounds(100, 100))

    assert not grid.is_passable(-1, 0)
    assert not grid.is_passable(0, 10)
    assert sorted(grid.neighbors(0, 0)) == [(0, 1), (1, 0)]


def test_ascii_dump_puts_top_row_first():
    grid = rasterize([Wall.horizontal(50, 5, 100)], FieldBounds(100, 40))

    rows = grid.to_rows(marks=[((3, 0), "S")])
    assert rows[0].startswith("S")
    assert rows[-1] == "#" * 10


def test_invalid_bounds_fail_before_building():
    with pytest.raises(InvalidFieldBounds):
        rasterize([], (0, 100))
