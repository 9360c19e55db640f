from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TypeVar

N = TypeVar("N", int, float)


def clamp(v: N, lo: N, hi: N) -> N:
    """Clamp v into [lo, hi]. An empty range (hi < lo) collapses to lo."""
    return max(lo, min(v, hi))


def config_value(
    cfg: Dict[str, Any],
    path: str,
    default: Any,
    cast: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Read a dotted path such as "field.width" from nested config sections.

    Returns `default` when any section on the path is missing or not an
    object, or when `cast` rejects the value found there.
    """
    cur: Any = cfg
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    if cast is None:
        return cur
    try:
        return cast(cur)
    except (TypeError, ValueError):
        return default
