# pathviz/core/scheduler.py
"""
Deferred reveal of a run's event stream.

The engine computes a whole run eagerly; the scheduler replays its events
onto the live grid one at a time, each `delay_ms` after the previous one,
against a virtual clock the caller advances (typically once per frame).

Every write is guarded: VISITED only recolors an EMPTY cell, PATH_STEP only
an EMPTY or VISITED cell. START, END and WALL are never recolored, so a
late event landing on a cell the user has since edited is simply dropped.
"""

import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Tuple

from pathviz.core.grid import Grid
from pathviz.core.types import CellChange, CellState, EventKind, VisualEvent

logger = logging.getLogger(__name__)

Listener = Callable[[CellChange], None]

_TARGET = {
    EventKind.VISITED: CellState.VISITED,
    EventKind.PATH_STEP: CellState.PATH,
}
_RECOLORABLE = {
    EventKind.VISITED: frozenset({CellState.EMPTY}),
    EventKind.PATH_STEP: frozenset({CellState.EMPTY, CellState.VISITED}),
}


class EventScheduler:
    def __init__(self, grid: Grid, speed: float = 1.0):
        self.grid = grid
        self.speed = speed
        self._queue: Deque[Tuple[float, VisualEvent]] = deque()  # (due_ms, event)
        self._clock_ms = 0.0
        self._tail_ms = 0.0
        self._listeners: List[Listener] = []

    # ---------- read-only state ----------
    @property
    def clock_ms(self) -> float:
        return self._clock_ms

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def is_draining(self) -> bool:
        return bool(self._queue)

    # ---------- wiring ----------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # ---------- queue ----------
    def schedule(self, events: Iterable[VisualEvent]) -> int:
        """Queue events behind anything still pending; delays are cumulative."""
        tail = max(self._tail_ms, self._clock_ms)
        n = 0
        for ev in events:
            tail += max(0, ev.delay_ms)
            self._queue.append((tail, ev))
            n += 1
        self._tail_ms = tail
        logger.debug("scheduled %d events, reveal ends at %.1f ms", n, tail)
        return n

    def advance(self, elapsed_ms: float) -> List[CellChange]:
        """Move the clock by `elapsed_ms` (scaled by speed) and apply what came due."""
        self._clock_ms += max(0.0, elapsed_ms) * self.speed
        return self._release(self._clock_ms)

    def drain(self) -> List[CellChange]:
        """Apply every pending event now, in order."""
        if not self._queue:
            return []
        self._clock_ms = max(self._clock_ms, self._queue[-1][0])
        return self._release(self._clock_ms)

    def _release(self, until_ms: float) -> List[CellChange]:
        changes: List[CellChange] = []
        while self._queue and self._queue[0][0] <= until_ms:
            _, ev = self._queue.popleft()
            change = self._apply(ev)
            if change is not None:
                changes.append(change)
        return changes

    def cancel(self) -> int:
        """Drop pending events; returns how many were dropped."""
        dropped = len(self._queue)
        self._queue.clear()
        self._tail_ms = self._clock_ms
        if dropped:
            logger.info("cancelled %d pending visualization events", dropped)
        return dropped

    # ---------- guarded write ----------
    def _apply(self, ev: VisualEvent):
        cell = ev.node.cell
        if not self.grid.in_bounds(cell):
            logger.debug("dropping %s event for out-of-bounds cell %s", ev.kind.value, cell)
            return None
        old = self.grid.state_of(cell)
        if old not in _RECOLORABLE[ev.kind]:
            logger.debug("skipping %s event on %s cell %s", ev.kind.value, old.value, cell)
            return None
        new = _TARGET[ev.kind]
        self.grid.set_state(cell, new)
        change = CellChange(cell[0], cell[1], old, new)
        for listener in list(self._listeners):
            listener(change)
        return change
