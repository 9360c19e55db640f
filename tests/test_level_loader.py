import json

import pygame
import pytest

from level_loader import (
    box_to_rect,
    build_level_from_layout,
    layout_from_dict,
    layout_to_dict,
    read_layout,
    write_layout,
)
from level_selector import select_layout
from models import Box, FieldBounds

FIELD = FieldBounds(390, 844)


def test_box_to_rect_flips_y_and_rounds_outwards():
    rect = box_to_rect(Box(10.5, 20.2, 30.5, 40.8), 100)

    assert rect == pygame.Rect(10, 59, 21, 21)


def test_build_level_from_layout():
    layout = select_layout(1, FIELD)
    level = build_level_from_layout(layout, FIELD)

    assert level.number == 1
    assert len(level.solids) == 4
    assert level.solids[0] == pygame.Rect(97, 552, 196, 21)
    assert level.goal_sensors == [pygame.Rect(315, 25, 50, 50)]
    assert level.spawn_px == pygame.Vector2(50, 794)
    assert level.time_limit == 30
    assert level.time_bonus == 10


def test_layout_json_file(tmp_path):
    layout = select_layout(3, FIELD)
    path = tmp_path / "level3" / "level3.json"

    write_layout(path, layout, FIELD)
    raw = json.loads(path.read_text(encoding="utf-8"))

    assert raw["field"] == {"width": 390, "height": 844}
    assert raw["timeLimit"] == 60
    assert raw["walls"][0]["orientation"] in ("horizontal", "vertical")
    assert read_layout(path) == layout


def test_goals_may_be_objects():
    raw = layout_to_dict(select_layout(1, FIELD))
    raw["goals"] = [{"x": 340, "y": 794}]

    assert layout_from_dict(raw).goals[0].x == 340.0


@pytest.mark.parametrize("drop", ["level", "start", "timeLimit"])
def test_missing_keys_are_reported(drop):
    raw = layout_to_dict(select_layout(1, FIELD))
    del raw[drop]

    with pytest.raises(ValueError):
        layout_from_dict(raw)


def test_bad_wall_is_reported():
    raw = layout_to_dict(select_layout(1, FIELD))
    raw["walls"][0]["orientation"] = "diagonal"

    with pytest.raises(ValueError):
        layout_from_dict(raw)


def test_missing_layout_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_layout(tmp_path / "nope.json")
