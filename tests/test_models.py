import math

import pytest

from models import (
    HORIZONTAL,
    VERTICAL,
    Box,
    FieldBounds,
    InvalidFieldBounds,
    MazeConfig,
    MazeLayout,
    Point,
    Wall,
)


def test_wall_extent_follows_orientation():
    h = Wall.horizontal(100, 50, 80)
    v = Wall.vertical(100, 50, 80)

    assert (h.width, h.height) == (80, 20)
    assert (v.width, v.height) == (20, 80)
    assert h.orientation == HORIZONTAL and v.orientation == VERTICAL


def test_wall_footprint_grows_by_margin():
    box = Wall.horizontal(100, 50, 80).footprint(15)

    assert box == Box(left=45, bottom=25, right=155, top=75)


def test_wall_rejects_bad_values():
    with pytest.raises(ValueError):
        Wall(10, 10, 0, HORIZONTAL)
    with pytest.raises(ValueError):
        Wall(10, 10, 5, "diagonal")


def test_wall_distance_is_measured_to_the_rectangle():
    wall = Wall.vertical(100, 100, 100)  # x 90..110, y 50..150

    assert wall.distance_to(Point(100, 100)) == 0
    assert wall.distance_to(Point(130, 100)) == pytest.approx(20)
    assert wall.distance_to(Point(113, 154)) == pytest.approx(5)


def test_box_touching_edges_do_not_intersect():
    a = Box(0, 0, 10, 10)

    assert not a.intersects(Box(10, 0, 20, 10))
    assert a.intersects(Box(9.5, 0, 20, 10))


@pytest.mark.parametrize(
    "width,height",
    [(0, 844), (390, 0), (-1, 10), (10, -5), (math.nan, 10), (10, math.inf)],
)
def test_field_bounds_must_be_positive(width, height):
    with pytest.raises(InvalidFieldBounds):
        FieldBounds(width, height)


def test_field_bounds_coerce_accepts_pairs():
    assert FieldBounds.coerce((390, 844)) == FieldBounds(390.0, 844.0)
    with pytest.raises(InvalidFieldBounds):
        FieldBounds.coerce((390,))


def test_layout_stores_tuples():
    layout = MazeLayout(
        level=1,
        walls=[Wall.horizontal(1, 1, 1)],
        goals=[Point(2, 2)],
        start=Point(0, 0),
        time_limit=30,
        difficulty=1.0,
        time_bonus=10,
    )

    assert isinstance(layout.walls, tuple)
    assert isinstance(layout.goals, tuple)
    assert hash(layout) == hash(layout)


@pytest.mark.parametrize(
    "changes", [{"level": 0}, {"time_limit": 0}, {"time_limit": -5}, {"time_bonus": -1}]
)
def test_layout_rejects_bad_metadata(changes):
    fields = dict(
        level=1,
        walls=[],
        goals=[Point(2, 2)],
        start=Point(1, 1),
        time_limit=30,
        difficulty=1.0,
        time_bonus=0,
    )
    fields.update(changes)

    with pytest.raises(ValueError):
        MazeLayout(**fields)


def test_field_inset_is_capped_on_small_fields():
    assert FieldBounds(390, 844).inset(50) == 50
    assert FieldBounds(40, 400).inset(50) == 10
    assert FieldBounds(390, 844).contains(Point(50, 50))
    assert not FieldBounds(390, 844).contains(Point(0, 50))
    assert not FieldBounds(390, 844).contains(Point(200, 844))


def test_config_requires_margin_wider_than_marble():
    with pytest.raises(ValueError):
        MazeConfig(clearance_margin=10, marble_radius=10)
    with pytest.raises(ValueError):
        MazeConfig(cell_size=0)
    with pytest.raises(ValueError):
        MazeConfig(edge_inset=0)


def test_config_from_dict_applies_defaults_and_clamps():
    cfg = MazeConfig.from_dict({"max_attempts": 0, "difficulty": {"maximum": 4}})

    assert cfg.max_attempts == 1
    assert cfg.cell_size == 10.0
    assert cfg.difficulty.maximum == 4.0
    assert cfg.time_bonus.maximum == 50
