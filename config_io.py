from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

SECTIONS = ("field", "maze")


def _config_error(path: Path, detail: str) -> SystemExit:
    return SystemExit(f"\nERROR: {path} is not a usable maze config.\n{detail}\n")


def load_json_config(path: Optional[Path]) -> Dict[str, Any]:
    """Load the maze config file, or an empty config when no path is given.

    The top level must be an object; the "field" and "maze" sections, when
    present, must be objects too. Other keys are ignored.

    Raises:
        FileNotFoundError: If the file does not exist.
        SystemExit: If the JSON is invalid or a section has the wrong shape,
            with a message pointing at the offending line or section.
    """
    if path is None:
        return {}
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise _config_error(
            path,
            f"Not valid JSON at line {e.lineno}, col {e.colno}: {e.msg}\n"
            f"Common fix: check for trailing commas after the last maze setting.",
        )
    if not isinstance(data, dict):
        raise _config_error(path, "The top level must be a JSON object.")
    for name in SECTIONS:
        if name in data and not isinstance(data[name], dict):
            raise _config_error(
                path, f'Section "{name}" must be an object, got {type(data[name]).__name__}.'
            )
    return data
