# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (row, col)


class CellState(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    VISITED = "visited"
    PATH = "path"

    @property
    def is_endpoint(self) -> bool:
        return self in (CellState.START, CellState.END)


class EventKind(Enum):
    VISITED = "visited"
    PATH_STEP = "path_step"


class SearchStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    NO_PATH = "no_path"

    @property
    def finished(self) -> bool:
        return self in (SearchStatus.FOUND, SearchStatus.NO_PATH)


@dataclass(frozen=True)
class Node:
    row: int
    col: int
    state: CellState = CellState.EMPTY

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


@dataclass(frozen=True)
class VisualEvent:
    """Recolor one cell `delay_ms` after the previous event was revealed."""
    kind: EventKind
    node: Node
    delay_ms: int


@dataclass(frozen=True)
class CellChange:
    row: int
    col: int
    old: CellState
    new: CellState


@dataclass
class StepResult:
    status: SearchStatus
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    events: List[VisualEvent] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    algo: str
    status: SearchStatus
    path: List[Node] = field(default_factory=list)
    events: List[VisualEvent] = field(default_factory=list)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def visited_events(self) -> List[VisualEvent]:
        return [e for e in self.events if e.kind is EventKind.VISITED]

    @property
    def path_events(self) -> List[VisualEvent]:
        return [e for e in self.events if e.kind is EventKind.PATH_STEP]
