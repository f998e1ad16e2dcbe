"""
Single-direction best-first search (A*) over a RouteGraph
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Union

from trailgraph.errors import InvalidNodeReference, NoPathExists
from trailgraph.services import cost_model
from trailgraph.services.graph_builder import RouteGraph
from trailgraph.services.instrumentation import MetricsSink, NullMetricsSink, report_failure, report_success
from trailgraph.services.path_reconstruction import reconstruct_path
from trailgraph.services.search_state import SearchResult, SearchState

logger = logging.getLogger(__name__)


def geodesic_heuristic(node_a, node_b) -> float:
    return cost_model.great_circle_km(node_a.lat, node_a.lon, node_b.lat, node_b.lon)


def zero_heuristic(node_a, node_b) -> float:
    return 0.0


# "degrees" is measured in raw lat/lon units while edge costs are kilometers, so
# it is not an admissible estimate in general. "geodesic" is admissible and
# consistent for computed costs since the elevation penalty is never negative.
HEURISTICS = {
    "degrees": cost_model.degree_distance,
    "geodesic": geodesic_heuristic,
    "zero": zero_heuristic,
}

Heuristic = Union[str, Callable]


def resolve_heuristic(heuristic: Heuristic) -> Callable:
    """Map a heuristic name to its function; callables pass through"""
    if callable(heuristic):
        return heuristic
    if heuristic not in HEURISTICS:
        raise ValueError(f"Unknown heuristic {heuristic!r}, expected one of {sorted(HEURISTICS)}")
    return HEURISTICS[heuristic]


class Pathfinder(ABC):
    """Base class for the search strategies. Holds no per-query state; subclasses implement ``search``."""

    name = "base"

    def __init__(self, graph: RouteGraph, metrics_sink: MetricsSink = None, heuristic: Heuristic = "degrees"):
        self.graph = graph
        self.metrics_sink = metrics_sink or NullMetricsSink()
        self.heuristic = resolve_heuristic(heuristic)

    def find_path(self, start: str, goal: str) -> List[str]:
        """Ordered node ids from start to goal, or [] when no route exists"""
        return self.search(start, goal).path

    @abstractmethod
    def search(self, start: str, goal: str) -> SearchResult:
        """Run one query. Raises InvalidNodeReference for ids outside the graph."""

    def validate_endpoints(self, start: str, goal: str):
        for node_id in (start, goal):
            if node_id not in self.graph:
                raise InvalidNodeReference(node_id)

    def heuristic_toward(self, target: str) -> Callable[[str], float]:
        nodes = self.graph.nodes
        target_node = nodes[target]
        heuristic = self.heuristic
        return lambda node_id: heuristic(nodes[node_id], target_node)

    def path_distance(self, path: List[str]) -> float:
        """Cost of ``path`` recomputed through the cost model"""
        return cost_model.path_cost([self.graph.node(node_id) for node_id in path])


class AStarPathfinder(Pathfinder):
    """
    Best-first search from start toward goal ordered by g + h.

    Nodes can re-enter the frontier when a cheaper route to them turns up, so
    an inconsistent heuristic never discards an improvement. The returned path
    is only guaranteed cheapest when the heuristic is admissible.
    """

    name = "astar"

    def search(self, start: str, goal: str) -> SearchResult:
        self.validate_endpoints(start, goal)
        start_time = time.perf_counter()

        state = SearchState(start, goal, self.heuristic_toward(goal))

        while state.has_open():
            current = state.peek()

            if current == goal:
                elapsed = time.perf_counter() - start_time
                path = reconstruct_path(state.predecessor, current)
                metrics = report_success(
                    self.metrics_sink, elapsed, state.max_open_size,
                    len(state.predecessor), self.path_distance(path)
                )
                logger.debug(f"[{self.name}] Path {start} -> {goal} with {len(path)} nodes in {metrics['searchTime']} ms")
                return SearchResult(path=path, cost=self.graph.path_cost(path), metrics=metrics)

            state.pop()
            state.relax(current, self.graph.neighbors(current))

        elapsed = time.perf_counter() - start_time
        error = NoPathExists(start, goal)
        logger.info(f"[{self.name}] {error} after {elapsed * 1000:.2f} ms "
                    f"(max open set size {state.max_open_size}, predecessor map size {len(state.predecessor)})")
        metrics = report_failure(self.metrics_sink, elapsed)
        return SearchResult(path=[], metrics=metrics, error=error)


class DijkstraPathfinder(AStarPathfinder):
    """A* with a zero heuristic: uniform-cost search"""

    name = "dijkstra"

    def __init__(self, graph: RouteGraph, metrics_sink: MetricsSink = None):
        super().__init__(graph, metrics_sink, heuristic="zero")
