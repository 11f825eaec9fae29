# pathviz/core/paths.py
from typing import Dict, List, Optional

from pathviz.core.types import Cell


def reconstruct_path(parent: Dict[Cell, Cell], terminal: Optional[Cell]) -> List[Cell]:
    """Follow back-pointers from `terminal` until a cell with no parent, then reverse.

    Missing entries mean "no predecessor", so an unreached terminal comes back
    as a singleton. Never raises.
    """
    if terminal is None:
        return []
    path: List[Cell] = []
    seen = set()
    cur: Optional[Cell] = terminal
    while cur is not None and cur not in seen:
        seen.add(cur)
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
