#!/usr/bin/env python3
"""
generate_levels.py

Pre-generates validated marble-maze layouts for a given play field.

Per generated level k:
- Creates:  levels/level{k}/
- Writes:   levels/level{k}/level{k}.json  (walls, start, goals, timing)

Numbering continues after the highest existing level folder, so running the
tool twice appends levels instead of overwriting them. Every written layout
has passed the reachability check (or is the open-field fallback for a field
too small to hold any pattern, which is reported).
"""

from __future__ import annotations

import argparse
import logging
import random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from config_io import load_json_config
from config_parsing import parse_field_bounds, parse_maze_config
from level_loader import write_layout
from level_selector import LevelSelector
from models import FieldBounds, MazeConfig, MazeLayout

LEVEL_DIR_RE = re.compile(r"^level(\d+)$", re.IGNORECASE)


@dataclass(frozen=True)
class LevelPaths:
    folder: Path
    json_path: Path


class LevelIndexScanner:
    def __init__(self, levels_root: Path) -> None:
        self.levels_root = levels_root

    def last_level_index(self) -> int:
        if not self.levels_root.exists():
            return 0
        indices: List[int] = []
        for child in self.levels_root.iterdir():
            if not child.is_dir():
                continue
            m = LEVEL_DIR_RE.match(child.name)
            if not m:
                continue
            indices.append(int(m.group(1)))
        return max(indices) if indices else 0


class LevelWriter:
    def __init__(self, levels_root: Path) -> None:
        self.levels_root = levels_root

    def paths_for(self, idx: int) -> LevelPaths:
        folder = self.levels_root / f"level{idx}"
        return LevelPaths(folder=folder, json_path=folder / f"level{idx}.json")

    def existing(self, indices: Iterable[int]) -> List[Path]:
        return [p.folder for p in map(self.paths_for, indices) if p.folder.exists()]

    def write(self, layout: MazeLayout, bounds: FieldBounds) -> Path:
        paths = self.paths_for(layout.level)
        paths.folder.mkdir(parents=True, exist_ok=False)
        write_layout(paths.json_path, layout, bounds)
        return paths.json_path


class LevelGenerator:
    def __init__(
        self,
        levels_root: Path,
        bounds: FieldBounds,
        config: Optional[MazeConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.levels_root = levels_root
        self.bounds = bounds
        self.scanner = LevelIndexScanner(levels_root)
        self.selector = LevelSelector(config, rng)
        self.writer = LevelWriter(levels_root)

    def first_level(self, start_level: Optional[int] = None) -> int:
        if start_level is not None:
            return start_level
        return self.scanner.last_level_index() + 1

    def generate(self, count: int, start_level: Optional[int] = None) -> List[MazeLayout]:
        self.levels_root.mkdir(parents=True, exist_ok=True)

        first = self.first_level(start_level)
        layouts: List[MazeLayout] = []
        for idx in range(first, first + count):
            layout = self.selector.select_layout(idx, self.bounds)
            self.writer.write(layout, self.bounds)
            layouts.append(layout)

            print(
                f"Generated level{idx}: {layout.strategy} | walls={len(layout.walls)} "
                f"goals={len(layout.goals)} time={layout.time_limit}s "
                f"difficulty={layout.difficulty:.1f} bonus={layout.time_bonus}"
            )
        return layouts


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate validated marble-maze layouts.")
    p.add_argument("count", type=int, help="How many levels to generate.")
    p.add_argument(
        "--levels-root",
        type=str,
        default="levels",
        help="Levels folder (default: levels)",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional JSON config with 'maze' and 'field' sections.",
    )
    p.add_argument("--width", type=float, default=None, help="Field width override.")
    p.add_argument("--height", type=float, default=None, help="Field height override.")
    p.add_argument(
        "--start-level",
        type=int,
        default=None,
        help="First level number (default: one past the last existing level).",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation.",
    )
    p.add_argument("--verbose", action="store_true", help="Log validation details.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args.count <= 0:
        raise SystemExit("count must be > 0")
    if args.start_level is not None and args.start_level < 1:
        raise SystemExit("--start-level must be >= 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = load_json_config(Path(args.config) if args.config else None)
    config = parse_maze_config(cfg)
    bounds = parse_field_bounds(cfg, args.width, args.height)
    seed = args.seed if args.seed is not None else config.seed
    rng = random.Random(seed)

    generator = LevelGenerator(Path(args.levels_root), bounds, config, rng)
    first = generator.first_level(args.start_level)
    clashes = generator.writer.existing(range(first, first + args.count))
    if clashes:
        names = ", ".join(p.name for p in clashes)
        raise SystemExit(f"Refusing to overwrite existing level folders: {names}")

    generator.generate(args.count, first)


if __name__ == "__main__":
    main()
