# pathviz/core/frontiers.py
import heapq
from collections import deque
from typing import Any, List, Tuple


class FIFOQueue:
    def __init__(self):
        self.q = deque()
    def push(self, x, priority: float = 0.0): self.q.append(x)
    def pop(self): return self.q.popleft()
    def __len__(self): return len(self.q)


class LIFOStack:
    def __init__(self):
        self.q = []
    def push(self, x, priority: float = 0.0): self.q.append(x)
    def pop(self): return self.q.pop()
    def __len__(self): return len(self.q)


class PriorityQueue:
    """Min-heap by priority; equal priorities pop in insertion order."""
    def __init__(self):
        self.h: List[Tuple[float, int, Any]] = []
        self.counter = 0  # monotonic tie-breaker
    def push(self, x, priority: float = 0.0):
        self.counter += 1
        heapq.heappush(self.h, (priority, self.counter, x))
    def pop(self):
        return heapq.heappop(self.h)[2]
    def __len__(self): return len(self.h)
