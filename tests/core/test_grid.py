"""Tests for pathviz.core.grid."""

from __future__ import annotations

import logging

import pytest

from pathviz.core.grid import Grid
from pathviz.core.types import CellState, Node


class TestGridCreate:
    def test_reference_placement(self) -> None:
        grid = Grid.create(50, margin=2)
        assert grid.start == (2, 2)
        assert grid.end == (47, 47)
        assert grid.state_of((2, 2)) is CellState.START
        assert grid.state_of((47, 47)) is CellState.END

    def test_everything_else_empty(self) -> None:
        grid = Grid.create(10, margin=1)
        counts = {}
        for node in grid.nodes():
            counts[node.state] = counts.get(node.state, 0) + 1
        assert counts == {CellState.EMPTY: 98, CellState.START: 1, CellState.END: 1}

    def test_margin_must_fit(self) -> None:
        with pytest.raises(ValueError):
            Grid.create(4, margin=2)

    def test_reset_is_idempotent(self) -> None:
        grid = Grid.create(6, margin=1)
        grid.toggle_wall(3, 3)
        grid.reset(1)
        once = grid.copy()
        grid.reset(1)
        assert grid == once


class TestGridFromRows:
    def test_parses_symbols(self) -> None:
        grid = Grid.from_rows(["S.#", "...", "#.E"])
        assert grid.size == 3
        assert grid.start == (0, 0)
        assert grid.end == (2, 2)
        assert grid.is_wall((0, 2))
        assert grid.is_wall((2, 0))

    def test_parses_run_marks(self) -> None:
        grid = Grid.from_rows(["S.#", ".v*", "#.E"])
        assert grid.state_of((1, 1)) is CellState.VISITED
        assert grid.state_of((1, 2)) is CellState.PATH

    @pytest.mark.parametrize(
        "rows",
        [
            [],
            ["S.", "."],
            ["SS", ".E"],
            ["S.", ".."],
            ["S?", ".E"],
        ],
    )
    def test_rejects_malformed(self, rows) -> None:
        with pytest.raises(ValueError):
            Grid.from_rows(rows)


class TestGridQueries:
    def test_node_returns_value(self) -> None:
        grid = Grid.from_rows(["S#", ".E"])
        assert grid.node(0, 1) == Node(0, 1, CellState.WALL)

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, 2), (2, 0), (None, 0), (0, None)])
    def test_invalid_node_reference_is_logged_sentinel(self, row, col, caplog) -> None:
        grid = Grid.from_rows(["S.", ".E"])
        with caplog.at_level(logging.WARNING, logger="pathviz.core.grid"):
            assert grid.node(row, col) is None
        assert "invalid node reference" in caplog.text

    @pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (1, -2), (2, 0), (0, 2)])
    def test_state_access_rejects_out_of_bounds(self, cell) -> None:
        grid = Grid.from_rows(["S.", ".E"])
        with pytest.raises(IndexError):
            grid.state_of(cell)
        with pytest.raises(IndexError):
            grid.set_state(cell, CellState.WALL)
        assert grid == Grid.from_rows(["S.", ".E"])

    def test_cost_of_is_unit(self) -> None:
        grid = Grid.from_rows(["S#", ".E"])
        assert grid.cost_of((1, 0)) == 1
        with pytest.raises(ValueError):
            grid.cost_of((0, 1))

    def test_snapshot_is_immutable_rows(self) -> None:
        grid = Grid.from_rows(["S.", ".E"])
        snap = grid.snapshot()
        assert snap == ((CellState.START, CellState.EMPTY), (CellState.EMPTY, CellState.END))
        grid.toggle_wall(0, 1)
        assert snap[0][1] is CellState.EMPTY


class TestGridMutation:
    def test_toggle_wall_flips(self) -> None:
        grid = Grid.from_rows(["S.", ".E"])
        assert grid.toggle_wall(0, 1)
        assert grid.is_wall((0, 1))
        assert grid.toggle_wall(0, 1)
        assert grid.state_of((0, 1)) is CellState.EMPTY

    def test_toggle_wall_ignores_endpoints_and_bounds(self) -> None:
        grid = Grid.from_rows(["S.", ".E"])
        assert not grid.toggle_wall(0, 0)
        assert not grid.toggle_wall(1, 1)
        assert not grid.toggle_wall(5, 5)
        assert grid == Grid.from_rows(["S.", ".E"])

    def test_swap_relocates_start(self) -> None:
        grid = Grid.from_rows(["S..", "...", "..E"])
        assert grid.swap((0, 0), (1, 1))
        assert grid.start == (1, 1)
        assert grid == Grid.from_rows(["...", ".S.", "..E"])

    def test_swap_keeps_single_endpoints(self) -> None:
        grid = Grid.from_rows(["S..", "...", "..E"])
        grid.swap((0, 0), (2, 2))
        assert grid.start == (2, 2)
        assert grid.end == (0, 0)
        states = [n.state for n in grid.nodes()]
        assert states.count(CellState.START) == 1
        assert states.count(CellState.END) == 1

    def test_clear_marks(self) -> None:
        grid = Grid.from_rows(["Sv#", ".*.", "..E"])
        grid.clear_marks()
        assert grid == Grid.from_rows(["S.#", "...", "..E"])

    def test_copy_is_independent(self) -> None:
        grid = Grid.from_rows(["S.", ".E"])
        other = grid.copy()
        other.toggle_wall(0, 1)
        assert not grid.is_wall((0, 1))
        assert grid != other
