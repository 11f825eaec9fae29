# pathviz/core/strategies.py
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from pathviz.core.frontiers import FIFOQueue, LIFOStack, PriorityQueue


@dataclass(frozen=True)
class StrategyPolicy:
    label: str
    make_frontier: Callable[[], object]
    cost_based: bool          # relax on improved g, possibly re-enqueue
    accumulates_cost: bool    # g(n) = g(cur) + w, else g(n) = g(cur)
    uses_heuristic: bool      # f = g + h(n, end), else f = g
    shortest_path: bool


class Strategy(Enum):
    BFS = StrategyPolicy("Breadth-First", FIFOQueue, False, True, False, True)
    DFS = StrategyPolicy("Depth-First", LIFOStack, False, True, False, False)
    DIJKSTRA = StrategyPolicy("Dijkstra", PriorityQueue, True, True, False, True)
    ASTAR = StrategyPolicy("A* Search", PriorityQueue, True, True, True, True)
    GREEDY = StrategyPolicy("Greedy Best-First", PriorityQueue, True, False, True, False)

    @property
    def policy(self) -> StrategyPolicy:
        return self.value

    @property
    def label(self) -> str:
        return self.value.label

    @classmethod
    def parse(cls, name: Union[str, "Strategy"]) -> "Strategy":
        """Accept an enum member, its name, or a display label ("A*", "Breadth-First", ...)."""
        if isinstance(name, Strategy):
            return name
        key = "".join(ch for ch in str(name).lower() if ch.isalnum() or ch == "*")
        for member in cls:
            if key in (member.name.lower(), _squash(member.label)):
                return member
        if key in _ALIASES:
            return cls[_ALIASES[key]]
        raise ValueError(f"unknown solver {name!r}; known: {', '.join(m.label for m in cls)}")


def _squash(label: str) -> str:
    return "".join(ch for ch in label.lower() if ch.isalnum() or ch == "*")


_ALIASES = {
    "breadthfirstsearch": "BFS",
    "depthfirstsearch": "DFS",
    "a*": "ASTAR",
    "astarsearch": "ASTAR",
    "greedy": "GREEDY",
    "greedybestfirstsearch": "GREEDY",
    "bestfirst": "GREEDY",
}
