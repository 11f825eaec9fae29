# pathviz/core/heuristics.py
"""
Distance estimates between grid cells, (row, col) tuples.

manhattan and euclidean never overestimate on a 4-connected unit grid, so
both keep A* optimal. squared_euclidean overestimates and is here for
comparison only; nothing selects it by default.
"""

from math import sqrt
from typing import Callable, Dict

from pathviz.core.types import Cell

Heuristic = Callable[[Cell, Cell], float]


def manhattan(a: Cell, b: Cell) -> float:
    return float(abs(a[0] - b[0]) + abs(a[1] - b[1]))


def euclidean(a: Cell, b: Cell) -> float:
    dr = a[0] - b[0]
    dc = a[1] - b[1]
    return sqrt(dr * dr + dc * dc)


def squared_euclidean(a: Cell, b: Cell) -> float:
    dr = a[0] - b[0]
    dc = a[1] - b[1]
    return float(dr * dr + dc * dc)


def zero(a: Cell, b: Cell) -> float:
    return 0.0


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
    "squared_euclidean": squared_euclidean,
    "zero": zero,
}

ADMISSIBLE = frozenset({"manhattan", "euclidean", "zero"})


def get_heuristic(name: str) -> Heuristic:
    key = name.strip().lower().replace("-", "_")
    try:
        return HEURISTICS[key]
    except KeyError:
        raise KeyError(f"unknown heuristic {name!r}; known: {', '.join(sorted(HEURISTICS))}") from None
