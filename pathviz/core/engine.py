# pathviz/core/engine.py
#!/usr/bin/env python3
"""
Search engine: one expansion per step(), or a whole run with run().

One loop serves all five strategies; the Strategy policy decides
- which frontier (FIFO / LIFO / min-priority) orders the pops,
- whether neighbors are relaxed on improved cost or only on first discovery,
- whether cost accumulates along the path, and whether f includes h(n, end).

Each enqueue emits a VISITED event and a successful pop of End emits one
PATH_STEP event per path cell; the caller hands them to the scheduler.

Tie-breaking in the priority queue: (f, seq), lower f first, then FIFO by
push order. Deterministic for a fixed grid.
"""

import logging
from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Optional, Set, Union

from pathviz.config import STEP_DELAY_MS, DEFAULT_HEURISTIC
from pathviz.core.frontiers import FIFOQueue, LIFOStack, PriorityQueue
from pathviz.core.grid import Grid
from pathviz.core.heuristics import Heuristic, get_heuristic, zero
from pathviz.core.neighbors import neighbors4
from pathviz.core.paths import reconstruct_path
from pathviz.core.strategies import Strategy
from pathviz.core.types import (
    Cell, EventKind, Node, SearchResult, SearchStatus, StepResult, VisualEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchAlgo:
    strategy: Strategy = Strategy.BFS
    heuristic: Optional[Heuristic] = None
    step_delay_ms: int = STEP_DELAY_MS

    # Internal state
    grid: Optional[Grid] = None
    start_cell: Optional[Cell] = None
    goal_cell: Optional[Cell] = None
    frontier: Optional[Union[FIFOQueue, LIFOStack, PriorityQueue]] = None  # holds (cell, g_at_push)
    visited: Set[Cell] = field(default_factory=set)
    closed_set: Set[Cell] = field(default_factory=set)
    g: Dict[Cell, float] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    events: List[VisualEvent] = field(default_factory=list)
    path: List[Cell] = field(default_factory=list)
    popped_count: int = 0
    steps: int = 0
    status: SearchStatus = SearchStatus.IDLE

    @property
    def name(self) -> str:
        return self.strategy.label

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, end: Cell) -> None:
        """Bind to a grid and explicit endpoints, then reset."""
        self.grid = grid
        self.start_cell = start
        self.goal_cell = end
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed the frontier with the start cell."""
        if self.grid is None:
            return
        policy = self.strategy.policy
        self.frontier = policy.make_frontier()
        self.visited.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.events = []
        self.path = []
        self.popped_count = 0
        self.steps = 0
        self.status = SearchStatus.RUNNING

        s = self.start_cell
        if not self.grid.in_bounds(s) or not self.grid.in_bounds(self.goal_cell):
            logger.warning("%s: start %s or end %s outside the grid; nothing to search",
                           self.name, s, self.goal_cell)
            return
        self.g[s] = 0
        self.visited.add(s)
        self.frontier.push((s, 0), self._f(s, 0))

    # -------------------- helpers --------------------

    def _h(self, c: Cell) -> float:
        policy = self.strategy.policy
        if not policy.uses_heuristic:
            return zero(c, self.goal_cell)
        h = self.heuristic or get_heuristic(DEFAULT_HEURISTIC)
        return h(c, self.goal_cell)

    def _f(self, c: Cell, g_c: float) -> float:
        return g_c + self._h(c)

    def _emit(self, kind: EventKind, node: Node) -> VisualEvent:
        ev = VisualEvent(kind, node, self.step_delay_ms)
        self.events.append(ev)
        return ev

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - pop per the strategy's ordering,
          - if it is End, reconstruct and finish,
          - else discover/relax neighbors in up, down, left, right order.
        """
        if self.grid is None:
            return StepResult(status=SearchStatus.IDLE, metrics={"algo": self.name})

        if self.status.finished:
            return StepResult(status=self.status, path=list(self.path) or None,
                              metrics=self._metrics())

        if not len(self.frontier):
            self.status = SearchStatus.NO_PATH
            logger.debug("%s: frontier exhausted after %d pops", self.name, self.popped_count)
            return StepResult(status=self.status, metrics=self._metrics())

        self.steps += 1
        policy = self.strategy.policy
        u, g_u = self.frontier.pop()

        # Ignore stale pops
        if policy.cost_based and g_u != self.g.get(u, inf):
            return StepResult(status=SearchStatus.RUNNING, current=u, metrics=self._metrics())

        self.popped_count += 1
        self.closed_set.add(u)

        if u == self.goal_cell:
            self.status = SearchStatus.FOUND
            self.path = reconstruct_path(self.parent, u)
            emitted = [self._emit(EventKind.PATH_STEP, self.grid.node(r, c)) for r, c in self.path]
            return StepResult(status=self.status, closed=[u], current=u, path=list(self.path),
                              events=emitted, metrics=self._metrics())

        opened_now: List[Cell] = []
        emitted: List[VisualEvent] = []
        for v in neighbors4(self.grid, u):
            vc = v.cell
            if policy.cost_based:
                step_cost = self.grid.cost_of(vc) if policy.accumulates_cost else 0
                alt = g_u + step_cost
                if vc in self.visited and alt >= self.g.get(vc, inf):
                    continue
            else:
                if vc in self.visited:
                    continue
                alt = g_u + 1

            self.g[vc] = alt
            self.parent[vc] = u
            self.visited.add(vc)
            self.frontier.push((vc, alt), self._f(vc, alt))
            opened_now.append(vc)
            emitted.append(self._emit(EventKind.VISITED, v))

        return StepResult(status=SearchStatus.RUNNING, opened=opened_now, closed=[u], current=u,
                          events=emitted, metrics=self._metrics())

    def run(self) -> SearchResult:
        """Step to completion; the loop has no suspension point."""
        if self.grid is None:
            return SearchResult(self.name, SearchStatus.IDLE, metrics={"algo": self.name})
        while not self.status.finished:
            self.step()

        nodes = [self.grid.node(r, c) for r, c in self.path]
        result = SearchResult(
            algo=self.name,
            status=self.status,
            path=nodes,
            events=list(self.events),
            parent=dict(self.parent),
            metrics=self._metrics(),
        )
        logger.info("%s: %s (visited=%d, popped=%d, path_len=%d)", self.name, self.status.value,
                    len(self.visited), self.popped_count, len(self.path))
        return result

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        found = self.status is SearchStatus.FOUND
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "visited": len(self.visited),
            "frontier_size": len(self.frontier) if self.frontier is not None else 0,
            "closed_count": len(self.closed_set),
            "path_len": len(self.path),
            "total_cost": self.g.get(self.goal_cell) if found else None,
            "steps": self.steps,
        }


def run_search(grid: Grid, start: Cell, end: Cell,
               strategy: Union[Strategy, str] = Strategy.BFS,
               heuristic: Union[Heuristic, str, None] = None,
               step_delay_ms: int = STEP_DELAY_MS) -> SearchResult:
    """Run one strategy to completion on a private copy of `grid`."""
    strategy = Strategy.parse(strategy)
    if isinstance(heuristic, str):
        heuristic = get_heuristic(heuristic)
    algo = SearchAlgo(strategy=strategy, heuristic=heuristic, step_delay_ms=step_delay_ms)
    algo.init(grid.copy(), start, end)
    return algo.run()


def shortest_path_length(grid: Grid, start: Cell, end: Cell) -> Optional[int]:
    """Edge count of a shortest start-end route, or None when unreachable."""
    result = run_search(grid, start, end, Strategy.BFS, step_delay_ms=0)
    return len(result.path) - 1 if result.found else None
