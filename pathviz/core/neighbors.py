# pathviz/core/neighbors.py
import logging
from typing import List, Optional, Union

from pathviz.core.grid import Grid
from pathviz.core.types import Cell, Node

logger = logging.getLogger(__name__)

# up, down, left, right; order drives tie-breaking in unweighted search
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors4(grid: Grid, node: Optional[Union[Node, Cell]]) -> List[Node]:
    """In-bounds, non-wall orthogonal neighbors of `node`.

    A missing or out-of-bounds node yields an empty list rather than an error.
    """
    if node is None:
        logger.warning("neighbors4 called with no node")
        return []
    r, c = node.cell if isinstance(node, Node) else node
    if not grid.in_bounds((r, c)):
        logger.warning("neighbors4 called with out-of-bounds cell (%s, %s)", r, c)
        return []

    out: List[Node] = []
    for dr, dc in DIRECTIONS:
        n = (r + dr, c + dc)
        if grid.in_bounds(n) and not grid.is_wall(n):
            out.append(Node(n[0], n[1], grid.state_of(n)))
    return out
