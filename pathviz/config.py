# pathviz/config.py
"""
Runtime settings.

Resolution order (later wins):
- module defaults below
- ENV: PATHVIZ_GRID_SIZE, PATHVIZ_MARGIN, PATHVIZ_STEP_DELAY_MS,
       PATHVIZ_HEURISTIC, PATHVIZ_SOLVER, PATHVIZ_SPEED, PATHVIZ_CELL_SIZE
- CLI: --grid-size=50 --step-delay-ms=5 --heuristic=euclidean ...
"""

import os
import sys
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional, Sequence

# ---------- Defaults ----------
GRID_SIZE = 50
ENDPOINT_MARGIN = 2          # Start/End inset from the corners
STEP_DELAY_MS = 5            # per-event reveal delay
DEFAULT_HEURISTIC = "euclidean"
DEFAULT_SOLVER = "bfs"
CELL_SIZE = 14               # viewer pixels per cell
SPEED = 1.0                  # scheduler clock multiplier

ENV_PREFIX = "PATHVIZ_"


@dataclass(frozen=True)
class Settings:
    grid_size: int = GRID_SIZE
    margin: int = ENDPOINT_MARGIN
    step_delay_ms: int = STEP_DELAY_MS
    heuristic: str = DEFAULT_HEURISTIC
    solver: str = DEFAULT_SOLVER
    cell_size: int = CELL_SIZE
    speed: float = SPEED

    def __post_init__(self):
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be >= 2, got {self.grid_size}")
        if self.margin < 0 or 2 * self.margin >= self.grid_size:
            raise ValueError(f"margin {self.margin} does not fit a {self.grid_size}x{self.grid_size} grid")
        if self.step_delay_ms < 0:
            raise ValueError(f"step_delay_ms must be >= 0, got {self.step_delay_ms}")
        if self.cell_size < 1:
            raise ValueError(f"cell_size must be >= 1, got {self.cell_size}")
        if self.speed <= 0:
            raise ValueError(f"speed must be > 0, got {self.speed}")


def _coerce(name: str, raw: str, kind: type):
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"invalid value for {name}: {raw!r}") from None


def _overrides_from_env(env: Mapping[str, str]) -> Dict[str, object]:
    out: Dict[str, object] = {}
    for f in fields(Settings):
        key = ENV_PREFIX + ("MARGIN" if f.name == "margin" else f.name.upper())
        if key in env and env[key] != "":
            out[f.name] = _coerce(key, env[key], type(getattr(Settings(), f.name)))
    return out


def _overrides_from_argv(argv: Sequence[str]) -> Dict[str, object]:
    known = {f.name: type(getattr(Settings(), f.name)) for f in fields(Settings)}
    out: Dict[str, object] = {}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, raw = arg[2:].split("=", 1)
        name = key.replace("-", "_")
        if name in known:
            out[name] = _coerce(f"--{key}", raw, known[name])
    return out


def load_settings(env: Optional[Mapping[str, str]] = None,
                  argv: Optional[Sequence[str]] = None) -> Settings:
    """Defaults, then environment, then command line."""
    env = os.environ if env is None else env
    argv = sys.argv[1:] if argv is None else argv
    settings = Settings()
    settings = replace(settings, **_overrides_from_env(env))
    settings = replace(settings, **_overrides_from_argv(argv))
    return settings
