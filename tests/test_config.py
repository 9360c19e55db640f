import pytest

from config_io import load_json_config
from config_parsing import DEFAULT_FIELD, parse_field_bounds, parse_maze_config
from models import FieldBounds, InvalidFieldBounds, MazeConfig
from utils import clamp, config_value


def test_defaults_without_maze_section():
    assert parse_maze_config({}) == MazeConfig()
    assert parse_field_bounds({}) == FieldBounds(*DEFAULT_FIELD)


def test_maze_section_is_applied():
    cfg = {
        "maze": {
            "cell_size": 5,
            "max_attempts": 7,
            "seed": "12",
            "difficulty": {"maximum": 4},
            "time_limit": {"per_goal": 15},
        }
    }

    config = parse_maze_config(cfg)

    assert config.cell_size == 5.0
    assert config.max_attempts == 7
    assert config.seed == 12
    assert config.difficulty.maximum == 4.0
    assert config.difficulty.per_level == 0.5
    assert config.time_limit.per_goal == 15


def test_out_of_range_values_are_clamped():
    config = parse_maze_config({"maze": {"max_goals": 9, "fixed_level_count": 12}})

    assert config.max_goals == 4
    assert config.fixed_level_count == 5


def test_unsafe_clearance_is_rejected():
    with pytest.raises(ValueError):
        parse_maze_config({"maze": {"clearance_margin": 8, "marble_radius": 10}})


def test_field_overrides_win():
    cfg = {"field": {"width": 320, "height": 568}}

    assert parse_field_bounds(cfg) == FieldBounds(320, 568)
    assert parse_field_bounds(cfg, width=414.0) == FieldBounds(414, 568)


def test_zero_width_field_is_rejected():
    with pytest.raises(InvalidFieldBounds):
        parse_field_bounds({"field": {"width": 0, "height": 844}})


def test_load_json_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"maze": {"cell_size": 8}}', encoding="utf-8")

    assert load_json_config(path) == {"maze": {"cell_size": 8}}


def test_invalid_json_exits_with_message(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"maze": {"cell_size": 8,}}', encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        load_json_config(path)
    assert "Not valid JSON at line 1" in str(exc.value)


def test_non_object_config_exits(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(SystemExit):
        load_json_config(path)


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "missing.json")


def test_no_config_path_means_defaults():
    assert load_json_config(None) == {}


def test_section_with_wrong_shape_exits(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"field": [390, 844]}', encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        load_json_config(path)
    assert 'Section "field" must be an object' in str(exc.value)


def test_unparsable_field_size_uses_default():
    bounds = parse_field_bounds({"field": {"width": "wide", "height": 600}})

    assert bounds == FieldBounds(DEFAULT_FIELD[0], 600)


def test_config_value_walks_dotted_paths():
    cfg = {"maze": {"difficulty": {"maximum": "4"}}, "field": 3}

    assert config_value(cfg, "maze.difficulty.maximum", 5.0, float) == 4.0
    assert config_value(cfg, "maze.time_limit.base", 30) == 30
    assert config_value(cfg, "field.width", 390.0) == 390.0


def test_clamp_collapses_empty_range_to_low_end():
    assert clamp(7, 1, 4) == 4
    assert clamp(0.5, 1.0, 5.0) == 1.0
    assert clamp(3, 10, 5) == 10
