"""Tests for pathviz.core.scheduler."""

from __future__ import annotations

import pytest

from pathviz.core.engine import run_search
from pathviz.core.grid import Grid
from pathviz.core.scheduler import EventScheduler
from pathviz.core.types import CellChange, CellState, EventKind, Node, VisualEvent


def visited(r: int, c: int, delay: int = 5) -> VisualEvent:
    return VisualEvent(EventKind.VISITED, Node(r, c), delay)


def path_step(r: int, c: int, delay: int = 5) -> VisualEvent:
    return VisualEvent(EventKind.PATH_STEP, Node(r, c), delay)


@pytest.fixture
def grid() -> Grid:
    return Grid.from_rows(["S..", ".#.", "..E"])


class TestTiming:
    def test_cumulative_delays_release_in_order(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1), visited(1, 0), visited(0, 2)])
        assert sched.advance(4) == []
        assert [(c.row, c.col) for c in sched.advance(1)] == [(0, 1)]
        assert [(c.row, c.col) for c in sched.advance(10)] == [(1, 0), (0, 2)]
        assert sched.pending == 0
        assert sched.clock_ms == 15

    def test_speed_scales_the_clock(self, grid) -> None:
        sched = EventScheduler(grid, speed=2.0)
        sched.schedule([visited(0, 1), visited(1, 0), visited(0, 2)])
        assert len(sched.advance(5)) == 2

    def test_zero_delay_releases_immediately(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1, delay=0)])
        assert len(sched.advance(0)) == 1

    def test_later_batch_queues_behind_pending(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1), visited(1, 0)])
        sched.advance(5)
        sched.schedule([path_step(0, 1)])
        assert [c.new for c in sched.advance(5)] == [CellState.VISITED]
        assert [c.new for c in sched.advance(5)] == [CellState.PATH]

    def test_batch_after_idle_starts_from_now(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.advance(100)
        sched.schedule([visited(0, 1)])
        assert sched.advance(4) == []
        assert len(sched.advance(1)) == 1

    def test_drain_applies_everything(self, grid) -> None:
        sched = EventScheduler(grid, speed=3.0)
        sched.schedule([visited(0, 1, 7), visited(1, 0, 11), path_step(0, 1, 13)])
        changes = sched.drain()
        assert len(changes) == 3
        assert not sched.is_draining
        assert sched.drain() == []

    def test_cancel_drops_pending(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1), visited(1, 0)])
        assert sched.cancel() == 2
        assert sched.advance(100) == []
        assert grid == Grid.from_rows(["S..", ".#.", "..E"])


class TestGuards:
    @pytest.mark.parametrize("cell", [(0, 0), (2, 2), (1, 1)])
    def test_endpoints_and_walls_never_recolored(self, grid, cell) -> None:
        sched = EventScheduler(grid)
        before = grid.state_of(cell)
        sched.schedule([visited(*cell), path_step(*cell)])
        assert sched.drain() == []
        assert grid.state_of(cell) is before

    def test_visited_is_idempotent(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1), visited(0, 1)])
        assert len(sched.drain()) == 1
        assert grid.state_of((0, 1)) is CellState.VISITED

    def test_path_overrides_visited_but_not_back(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1), path_step(0, 1), visited(0, 1)])
        changes = sched.drain()
        assert changes == [
            CellChange(0, 1, CellState.EMPTY, CellState.VISITED),
            CellChange(0, 1, CellState.VISITED, CellState.PATH),
        ]
        assert grid.state_of((0, 1)) is CellState.PATH

    def test_edit_racing_the_reveal_wins(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(0, 1), visited(0, 2)])
        sched.advance(5)
        grid.toggle_wall(0, 2)
        assert sched.advance(5) == []
        assert grid.is_wall((0, 2))

    def test_out_of_bounds_event_dropped(self, grid) -> None:
        sched = EventScheduler(grid)
        sched.schedule([visited(7, 7)])
        assert sched.drain() == []


class TestListeners:
    def test_listener_sees_each_change(self, grid) -> None:
        seen = []
        sched = EventScheduler(grid)
        sched.subscribe(seen.append)
        sched.schedule([visited(0, 1), visited(0, 0)])
        sched.drain()
        assert seen == [CellChange(0, 1, CellState.EMPTY, CellState.VISITED)]

    def test_every_listener_is_notified(self, grid) -> None:
        first, second = [], []
        sched = EventScheduler(grid)
        sched.subscribe(first.append)
        sched.subscribe(second.append)
        sched.schedule([visited(1, 0), path_step(1, 0)])
        sched.drain()
        assert first == second
        assert [c.new for c in first] == [CellState.VISITED, CellState.PATH]


class TestWithEngine:
    def test_replaying_a_run_marks_the_path(self) -> None:
        grid = Grid.from_rows(["S.#..", "..#..", "..#..", "..#..", "....E"])
        result = run_search(grid, grid.start, grid.end, "bfs")
        sched = EventScheduler(grid)
        sched.schedule(result.events)
        sched.drain()
        for node in result.path[1:-1]:
            assert grid.state_of(node.cell) is CellState.PATH
        assert grid.state_of(grid.start) is CellState.START
        assert grid.state_of(grid.end) is CellState.END
        assert all(grid.state_of((r, 2)) is CellState.WALL for r in range(4))

    def test_reveal_time_is_linear_in_events(self) -> None:
        grid = Grid.from_rows(["S....", ".....", ".....", ".....", "....E"])
        result = run_search(grid, grid.start, grid.end, "bfs", step_delay_ms=5)
        sched = EventScheduler(grid)
        sched.schedule(result.events)
        sched.advance(5 * len(result.events) - 1)
        assert sched.pending == 1
        sched.advance(1)
        assert sched.pending == 0
