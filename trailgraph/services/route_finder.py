"""
Route finder service: picks a search strategy per request and summarises the route it returns
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from trailgraph.errors import InvalidNodeReference
from trailgraph.services import cost_model
from trailgraph.services.astar import AStarPathfinder, DijkstraPathfinder, Heuristic, Pathfinder
from trailgraph.services.bidirectional import BidirectionalPathfinder
from trailgraph.services.graph_builder import GraphBuilder, RouteGraph
from trailgraph.services.instrumentation import CompositeMetricsSink, MetricsRecorder, MetricsSink
from trailgraph.services.search_config import SearchConfig

logger = logging.getLogger(__name__)

# Options a single request may override; cost_source is fixed when the graph is built
QUERY_OPTIONS = ("algorithm", "heuristic", "stopping_rule")


def create_pathfinder(algorithm: str, graph: RouteGraph, metrics_sink: MetricsSink = None,
                      heuristic: Heuristic = "degrees", stopping_rule: str = "first_meeting") -> Pathfinder:
    """Instantiate the search strategy called ``algorithm``"""
    if algorithm == "astar":
        return AStarPathfinder(graph, metrics_sink, heuristic)
    if algorithm == "bidirectional":
        return BidirectionalPathfinder(graph, metrics_sink, heuristic, stopping_rule)
    if algorithm == "dijkstra":
        return DijkstraPathfinder(graph, metrics_sink)
    raise ValueError(f"Invalid pathfinder selection: {algorithm}")


class RouteFinderService:
    """Service for finding routes between nodes of a prebuilt graph"""

    def __init__(self, graph: RouteGraph, config: SearchConfig = None, metrics_sink: MetricsSink = None):
        self.graph = graph
        self.config = config or SearchConfig()
        self.metrics_sink = metrics_sink
        logger.info(f"RouteFinderService initialized with {len(graph)} nodes, config={self.config}")

    @classmethod
    def from_data(cls, nodes: Iterable, edges: Iterable, config: SearchConfig = None,
                  metrics_sink: MetricsSink = None) -> "RouteFinderService":
        """Build the graph with the config's cost source and wrap it in a service"""
        config = config or SearchConfig()
        graph = GraphBuilder(cost_source=config.cost_source).build(nodes, edges)
        return cls(graph, config, metrics_sink)

    def validate_route_request(self, start_id: str, goal_id: str) -> Optional[str]:
        """Error message for an unusable request, None if it is fine"""
        for node_id in (start_id, goal_id):
            if node_id not in self.graph:
                return str(InvalidNodeReference(node_id))
        return None

    def find_route(self, start_id: str, goal_id: str, options: Dict = None) -> Tuple[List[str], dict]:
        """
        Find the route between two node ids
        Returns: (path, statistics)
        """
        overrides = {k: v for k, v in (options or {}).items() if k in QUERY_OPTIONS}
        try:
            config = self.config.with_overrides(**overrides)
        except ValueError as e:
            return [], {"error": str(e)}

        error = self.validate_route_request(start_id, goal_id)
        if error:
            logger.error(f"Invalid route request: {error}")
            return [], {"error": error}

        recorder = MetricsRecorder()
        sink = CompositeMetricsSink([recorder, self.metrics_sink]) if self.metrics_sink else recorder
        pathfinder = create_pathfinder(config.algorithm, self.graph, sink, config.heuristic, config.stopping_rule)

        result = pathfinder.search(start_id, goal_id)

        if not result.found:
            logger.error(f"No route found by {pathfinder.name}")
            return [], {
                "error": str(result.error),
                "algorithm": pathfinder.name,
                "metrics": dict(recorder.metrics)
            }

        stats = self.calculate_statistics(result.path)
        stats.update({
            "algorithm": pathfinder.name,
            "total_cost": round(result.cost, 4),
            "metrics": dict(recorder.metrics)
        })
        if result.meeting_node is not None:
            stats["meeting_node"] = result.meeting_node

        return result.path, stats

    def calculate_statistics(self, path: List[str]) -> dict:
        """Distance and elevation summary for a path"""
        nodes = [self.graph.node(node_id) for node_id in path]
        climbs = cost_model.segment_climbs_m(nodes)

        return {
            "distance_km": round(float(np.sum(cost_model.segment_distances_km(nodes))), 2),
            "elevation_gain_m": round(float(np.sum(climbs[climbs > 0])), 1),
            "elevation_loss_m": round(float(np.sum(-climbs[climbs < 0])), 1),
            "waypoints": len(path)
        }
