# pathviz/core/session.py
"""
The surface the UI talks to: edits, solver selection and run().

run() computes the whole search synchronously on a copy of the grid and
queues its events on the scheduler; the UI advances the scheduler per
frame to reveal them. `is_running` only covers the synchronous call, so
it does not block edits while the reveal is still animating; callers that
want that gate should check `is_animating` as well.
"""

import logging
from typing import Optional, Tuple, Union

from pathviz.config import Settings
from pathviz.core.engine import run_search
from pathviz.core.grid import Grid
from pathviz.core.heuristics import get_heuristic
from pathviz.core.scheduler import EventScheduler, Listener
from pathviz.core.strategies import Strategy
from pathviz.core.types import CellState, SearchResult, SearchStatus

logger = logging.getLogger(__name__)

GENERATORS = ("Recursive Division", "Random Walk", "Prim's", "Kruskal's", "Eller's")


class PathfinderSession:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.grid = Grid.create(self.settings.grid_size, self.settings.margin)
        self.scheduler = EventScheduler(self.grid, speed=self.settings.speed)
        self.solver = Strategy.parse(self.settings.solver)
        self.heuristic = get_heuristic(self.settings.heuristic)
        self.generator: Optional[str] = None
        self.is_running = False
        self.last_result: Optional[SearchResult] = None

    # ---------- state ----------
    @property
    def start(self) -> Tuple[int, int]:
        return self.grid.start

    @property
    def end(self) -> Tuple[int, int]:
        return self.grid.end

    @property
    def is_animating(self) -> bool:
        return self.scheduler.is_draining

    @property
    def status(self) -> SearchStatus:
        return self.last_result.status if self.last_result else SearchStatus.IDLE

    def snapshot(self):
        return self.grid.snapshot()

    def subscribe(self, listener: Listener) -> None:
        self.scheduler.subscribe(listener)

    def advance(self, elapsed_ms: float):
        return self.scheduler.advance(elapsed_ms)

    # ---------- selection ----------
    def select_solver(self, name: Union[str, Strategy]) -> Strategy:
        self.solver = Strategy.parse(name)
        logger.info("solver selected: %s", self.solver.label)
        return self.solver

    def select_generator(self, name: str) -> None:
        """Recorded for the UI; no maze generator exists behind it."""
        self.generator = name
        logger.info("generator %r selected (no generator implemented)", name)

    # ---------- edits ----------
    def toggle_wall(self, row: int, col: int) -> bool:
        if self.is_running:
            return False
        return self.grid.toggle_wall(row, col)

    def clear(self) -> None:
        """Reset to all Empty plus the fixed Start/End, dropping any pending reveal."""
        self.scheduler.cancel()
        self.grid.reset(self.settings.margin)
        self.last_result = None

    def move_endpoint(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        src, dst = (from_row, from_col), (to_row, to_col)
        if self.is_running or not (self.grid.in_bounds(src) and self.grid.in_bounds(dst)):
            return False
        if not self.grid.state_of(src).is_endpoint or self.grid.state_of(dst).is_endpoint:
            return False
        return self.grid.swap(src, dst)

    # ---------- run ----------
    def run(self) -> SearchResult:
        """Search with the selected solver and queue the reveal."""
        self.scheduler.cancel()
        self.grid.clear_marks()
        self.is_running = True
        try:
            result = run_search(
                self.grid, self.grid.start, self.grid.end,
                strategy=self.solver,
                heuristic=self.heuristic,
                step_delay_ms=self.settings.step_delay_ms,
            )
        finally:
            self.is_running = False
        self.scheduler.schedule(result.events)
        self.last_result = result
        if not result.found:
            logger.info("%s found no path from %s to %s", result.algo, self.grid.start, self.grid.end)
        return result

    def count(self, state: CellState) -> int:
        return sum(1 for n in self.grid.nodes() if n.state is state)
