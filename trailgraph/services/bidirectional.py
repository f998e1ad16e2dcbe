"""
Bidirectional best-first search: one frontier grows from the start, one from the goal
"""

import logging
import math
import time
from typing import Optional

from trailgraph.errors import NoPathExists
from trailgraph.services.astar import Heuristic, Pathfinder
from trailgraph.services.graph_builder import RouteGraph
from trailgraph.services.instrumentation import MetricsSink, report_failure, report_success
from trailgraph.services.path_reconstruction import reconstruct_bidirectional_path
from trailgraph.services.search_state import SearchResult, SearchState

logger = logging.getLogger(__name__)

STOPPING_RULES = ("first_meeting", "optimal")


class BidirectionalPathfinder(Pathfinder):
    """
    Alternates one expansion step from each end until the searches meet.

    Each side keeps its own scores, predecessors and frontier, with the
    heuristic aimed at the opposite endpoint.

    stopping_rule:
    - "first_meeting": stop as soon as a node just expanded by one side already
      has a predecessor recorded by the other side. Fast, but the joined path
      is not guaranteed to be the cheapest.
    - "optimal": keep the cheapest gF(v) + gB(v) seen over every node reached
      by both sides and stop once either frontier's smallest f key reaches it.
      Exact for non-negative costs with a consistent heuristic
      ("geodesic" on computed costs, or "zero").
    """

    name = "bidirectional"

    def __init__(self, graph: RouteGraph, metrics_sink: MetricsSink = None, heuristic: Heuristic = "degrees",
                 stopping_rule: str = "first_meeting"):
        super().__init__(graph, metrics_sink, heuristic)
        if stopping_rule not in STOPPING_RULES:
            raise ValueError(f"stopping_rule must be one of {STOPPING_RULES}, got {stopping_rule!r}")
        self.stopping_rule = stopping_rule

    def search(self, start: str, goal: str) -> SearchResult:
        self.validate_endpoints(start, goal)
        start_time = time.perf_counter()

        forward = SearchState(start, goal, self.heuristic_toward(goal))
        backward = SearchState(goal, start, self.heuristic_toward(start))

        if start == goal:
            meeting = start
        elif self.stopping_rule == "optimal":
            meeting = self._search_optimal(forward, backward)
        else:
            meeting = self._search_first_meeting(forward, backward)

        elapsed = time.perf_counter() - start_time
        max_open_set_size = forward.max_open_size + backward.max_open_size
        predecessor_map_size = len(forward.predecessor) + len(backward.predecessor)

        if meeting is None:
            error = NoPathExists(start, goal)
            logger.info(f"[{self.name}] {error} after {elapsed * 1000:.2f} ms "
                        f"(max open set size {max_open_set_size}, predecessor map size {predecessor_map_size})")
            metrics = report_failure(self.metrics_sink, elapsed)
            return SearchResult(path=[], metrics=metrics, error=error)

        path = reconstruct_bidirectional_path(forward.predecessor, backward.predecessor, meeting)
        metrics = report_success(
            self.metrics_sink, elapsed, max_open_set_size,
            predecessor_map_size, self.path_distance(path)
        )
        logger.debug(f"[{self.name}] Searches met at {meeting}, path has {len(path)} nodes")
        return SearchResult(path=path, cost=self.graph.path_cost(path), metrics=metrics, meeting_node=meeting)

    def _search_first_meeting(self, forward: SearchState, backward: SearchState) -> Optional[str]:
        while forward.has_open() or backward.has_open():
            for side, other in ((forward, backward), (backward, forward)):
                if not side.has_open():
                    continue
                current = side.pop()
                side.relax(current, self.graph.neighbors(current))

                if current in other.predecessor:
                    return current
        return None

    def _search_optimal(self, forward: SearchState, backward: SearchState) -> Optional[str]:
        best_cost = math.inf
        meeting = None

        while forward.has_open() or backward.has_open():
            for side, other in ((forward, backward), (backward, forward)):
                if best_cost < math.inf and (forward.min_f() >= best_cost or backward.min_f() >= best_cost):
                    return meeting
                if not side.has_open():
                    continue
                current = side.pop()

                for node in side.relax(current, self.graph.neighbors(current)):
                    total = side.g(node) + other.g(node)
                    if total < best_cost:
                        best_cost = total
                        meeting = node

        return meeting
