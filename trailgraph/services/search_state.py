"""
Per-query search bookkeeping shared by the single and bidirectional searches
"""

import heapq
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from trailgraph.errors import NoPathExists


class SearchState:
    """
    Scores, predecessors and frontier for one search direction.

    A fresh instance is created for every query and dropped afterwards, so a
    graph or pathfinder can serve any number of sequential queries.

    The frontier is a binary heap of (f_score, -g_score, tie_breaker, node)
    entries. Improving a node pushes a new entry; superseded entries are
    skipped when they reach the top. ``open_nodes`` is the authoritative
    membership set and its size is what the high-water mark tracks.
    """

    def __init__(self, root: str, target: str, heuristic: Callable[[str], float]):
        self.root = root
        self.target = target
        self.heuristic = heuristic

        self.g_score: Dict[str, float] = {root: 0.0}
        self.f_score: Dict[str, float] = {root: heuristic(root)}
        self.predecessor: Dict[str, str] = {}
        self.open_nodes = {root}
        self.max_open_size = 1

        self._heap: List[Tuple[float, float, int, str]] = []
        self._tie_breaker = 0
        self._push(root)

    def g(self, node: str) -> float:
        return self.g_score.get(node, math.inf)

    def has_open(self) -> bool:
        return bool(self.open_nodes)

    def peek(self) -> Optional[str]:
        """Open node with the lowest f_score, or None if the frontier is empty"""
        self._discard_stale()
        return self._heap[0][3] if self._heap else None

    def min_f(self) -> float:
        self._discard_stale()
        return self._heap[0][0] if self._heap else math.inf

    def pop(self) -> Optional[str]:
        """Remove and return the open node with the lowest f_score"""
        self._discard_stale()
        if not self._heap:
            return None
        _, _, _, node = heapq.heappop(self._heap)
        self.open_nodes.discard(node)
        return node

    def relax(self, current: str, neighbors) -> List[str]:
        """
        Try every (neighbor, cost) pair through ``current``.

        Returns the neighbors whose g_score improved.
        """
        improved = []
        current_g = self.g_score[current]
        for neighbor, cost in neighbors:
            tentative_g = current_g + cost
            if tentative_g < self.g(neighbor):
                self.predecessor[neighbor] = current
                self.g_score[neighbor] = tentative_g
                self.f_score[neighbor] = tentative_g + self.heuristic(neighbor)
                self.open_nodes.add(neighbor)
                self._push(neighbor)
                if len(self.open_nodes) > self.max_open_size:
                    self.max_open_size = len(self.open_nodes)
                improved.append(neighbor)
        return improved

    def _push(self, node: str):
        heapq.heappush(self._heap, (self.f_score[node], -self.g_score[node], self._tie_breaker, node))
        self._tie_breaker += 1

    def _discard_stale(self):
        heap = self._heap
        while heap:
            f, neg_g, _, node = heap[0]
            if node in self.open_nodes and f == self.f_score[node] and -neg_g == self.g_score[node]:
                return
            heapq.heappop(heap)


@dataclass
class SearchResult:
    """Outcome of one search: the path plus everything reported about it"""
    path: List[str]
    cost: float = math.inf
    metrics: Dict[str, str] = field(default_factory=dict)
    error: Optional[NoPathExists] = None
    meeting_node: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.path)
