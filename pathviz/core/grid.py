# pathviz/core/grid.py
#!/usr/bin/env python3
"""
Square grid of typed cells, stored flat and addressed by (row, col).

Cells are mutated in place; `node()` hands out immutable Node values so
callers never alias the grid's storage.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from pathviz.config import ENDPOINT_MARGIN
from pathviz.core.types import Cell, CellState, Node

logger = logging.getLogger(__name__)

_SYMBOLS = {
    ".": CellState.EMPTY,
    "#": CellState.WALL,
    "S": CellState.START,
    "E": CellState.END,
    "v": CellState.VISITED,
    "*": CellState.PATH,
}


class Grid:
    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        self._cells: List[CellState] = [CellState.EMPTY] * (size * size)
        self._start: Optional[Cell] = None
        self._end: Optional[Cell] = None

    # -------------------- construction --------------------

    @classmethod
    def create(cls, size: int, margin: int = ENDPOINT_MARGIN) -> "Grid":
        """All Empty, Start inset from the top-left and End from the bottom-right."""
        grid = cls(size)
        grid.reset(margin)
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Build from text rows: '.' empty, '#' wall, 'S' start, 'E' end."""
        size = len(rows)
        if size == 0 or any(len(r) != size for r in rows):
            raise ValueError("rows must form a non-empty square")
        grid = cls(size)
        starts: List[Cell] = []
        ends: List[Cell] = []
        for r, line in enumerate(rows):
            for c, ch in enumerate(line):
                if ch not in _SYMBOLS:
                    raise ValueError(f"unknown cell symbol {ch!r} at ({r}, {c})")
                state = _SYMBOLS[ch]
                grid._cells[r * size + c] = state
                if state is CellState.START:
                    starts.append((r, c))
                elif state is CellState.END:
                    ends.append((r, c))
        if len(starts) != 1 or len(ends) != 1:
            raise ValueError(f"expected exactly one S and one E, got {len(starts)} and {len(ends)}")
        grid._start, grid._end = starts[0], ends[0]
        return grid

    def copy(self) -> "Grid":
        other = Grid(self.size)
        other._cells = list(self._cells)
        other._start = self._start
        other._end = self._end
        return other

    # -------------------- queries --------------------

    @property
    def start(self) -> Cell:
        return self._start

    @property
    def end(self) -> Cell:
        return self._end

    def in_bounds(self, cell: Optional[Cell]) -> bool:
        if cell is None:
            return False
        r, c = cell
        return 0 <= r < self.size and 0 <= c < self.size

    def _index(self, cell: Cell) -> int:
        # negative indices would otherwise wrap to another cell
        if not self.in_bounds(cell):
            raise IndexError(f"cell {cell} outside {self.size}x{self.size} grid")
        r, c = cell
        return r * self.size + c

    def node(self, row: Optional[int], col: Optional[int]) -> Optional[Node]:
        """Node at (row, col), or None (logged) for a missing or out-of-bounds reference."""
        if row is None or col is None or not self.in_bounds((row, col)):
            logger.warning("invalid node reference (%r, %r) on %dx%d grid", row, col, self.size, self.size)
            return None
        return Node(row, col, self._cells[row * self.size + col])

    def state_of(self, cell: Cell) -> CellState:
        return self._cells[self._index(cell)]

    def is_wall(self, cell: Cell) -> bool:
        return self.state_of(cell) is CellState.WALL

    def cost_of(self, cell: Cell) -> int:
        """Edge weight for stepping onto `cell`; the grid is unweighted."""
        if self.is_wall(cell):
            raise ValueError(f"asked cost of a wall cell {cell}")
        return 1

    def nodes(self) -> Iterator[Node]:
        for i, state in enumerate(self._cells):
            yield Node(i // self.size, i % self.size, state)

    def snapshot(self) -> Tuple[Tuple[CellState, ...], ...]:
        n = self.size
        return tuple(tuple(self._cells[r * n:(r + 1) * n]) for r in range(n))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.size, self._cells, self._start, self._end) == \
               (other.size, other._cells, other._start, other._end)

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, start={self._start}, end={self._end})"

    # -------------------- mutation --------------------

    def set_state(self, cell: Cell, state: CellState) -> None:
        self._cells[self._index(cell)] = state

    def reset(self, margin: int = ENDPOINT_MARGIN) -> None:
        """Everything Empty except the fixed Start/End placement."""
        n = self.size
        if margin < 0 or 2 * margin >= n:
            raise ValueError(f"margin {margin} does not fit a {n}x{n} grid")
        self._cells = [CellState.EMPTY] * (n * n)
        self._start = (margin, margin)
        self._end = (n - 1 - margin, n - 1 - margin)
        self.set_state(self._start, CellState.START)
        self.set_state(self._end, CellState.END)

    def toggle_wall(self, row: int, col: int) -> bool:
        """Flip Empty <-> Wall. Start/End and out-of-bounds are left alone."""
        cell = (row, col)
        if not self.in_bounds(cell):
            logger.warning("toggle_wall ignored for out-of-bounds cell %s", cell)
            return False
        state = self.state_of(cell)
        if state.is_endpoint:
            return False
        self.set_state(cell, CellState.EMPTY if state is CellState.WALL else CellState.WALL)
        return True

    def swap(self, a: Cell, b: Cell) -> bool:
        """Exchange the contents of two cells, keeping start/end in sync."""
        if not (self.in_bounds(a) and self.in_bounds(b)):
            logger.warning("swap ignored for out-of-bounds cells %s, %s", a, b)
            return False
        if a == b:
            return False
        sa, sb = self.state_of(a), self.state_of(b)
        self.set_state(a, sb)
        self.set_state(b, sa)
        for cell, state in ((a, sb), (b, sa)):
            if state is CellState.START:
                self._start = cell
            elif state is CellState.END:
                self._end = cell
        return True

    def clear_marks(self) -> None:
        """Drop Visited/PathMarked left over from a previous run."""
        for i, state in enumerate(self._cells):
            if state in (CellState.VISITED, CellState.PATH):
                self._cells[i] = CellState.EMPTY
