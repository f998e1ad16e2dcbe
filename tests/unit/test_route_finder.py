"""
Tests for RouteFinderService and pathfinder selection
"""

import pytest

from trailgraph.services.astar import AStarPathfinder, DijkstraPathfinder
from trailgraph.services.bidirectional import BidirectionalPathfinder
from trailgraph.services.instrumentation import MetricsRecorder
from trailgraph.services.route_finder import RouteFinderService, create_pathfinder
from trailgraph.services.search_config import SearchConfig, SearchPresets
from tests.fixtures.graph_fixtures import make_edges, make_nodes, terrain_grid


@pytest.mark.unit
class TestCreatePathfinder:

    def test_selection(self, line_graph):
        assert isinstance(create_pathfinder("astar", line_graph), AStarPathfinder)
        assert isinstance(create_pathfinder("dijkstra", line_graph), DijkstraPathfinder)

        bidirectional = create_pathfinder("bidirectional", line_graph, stopping_rule="optimal")
        assert isinstance(bidirectional, BidirectionalPathfinder)
        assert bidirectional.stopping_rule == "optimal"

    def test_invalid_selection(self, line_graph):
        with pytest.raises(ValueError, match="Invalid pathfinder selection"):
            create_pathfinder("greedy", line_graph)


@pytest.mark.unit
class TestRouteFinderService:

    def test_find_route_stats(self, terrain_graph):
        service = RouteFinderService(terrain_graph)
        path, stats = service.find_route("r0c0", "r4c4")

        assert path[0] == "r0c0" and path[-1] == "r4c4"
        assert stats["algorithm"] == "astar"
        assert stats["waypoints"] == len(path)
        assert stats["distance_km"] > 0
        assert stats["elevation_gain_m"] >= 0
        assert stats["elevation_loss_m"] >= 0
        assert set(stats["metrics"]) == {"searchTime", "maxOpenSetSize", "predecessorMapSize", "pathDistance"}
        assert "meeting_node" not in stats

    def test_options_override_config(self, detour_graph):
        service = RouteFinderService(detour_graph, SearchPresets.dijkstra())

        path, stats = service.find_route(
            "S", "G", {"algorithm": "bidirectional", "heuristic": "zero", "stopping_rule": "optimal"}
        )
        assert path == ["S", "X", "G"]
        assert stats["algorithm"] == "bidirectional"
        assert stats["meeting_node"] == "X"
        assert stats["total_cost"] == 6.0
        # the service's own config is untouched
        assert service.config.algorithm == "dijkstra"

    def test_invalid_option(self, line_graph):
        path, stats = RouteFinderService(line_graph).find_route("A", "D", {"algorithm": "teleport"})
        assert path == []
        assert "algorithm" in stats["error"]

    def test_unknown_node(self, line_graph):
        path, stats = RouteFinderService(line_graph).find_route("A", "Q")
        assert path == []
        assert stats["error"] == "Unknown node id: Q"

    def test_no_route(self, isolated_graph):
        path, stats = RouteFinderService(isolated_graph).find_route("A", "E")
        assert path == []
        assert stats["error"] == "No path found from A to E"
        assert list(stats["metrics"]) == ["searchTime"]

    def test_external_sink_also_receives_metrics(self, line_graph):
        sink = MetricsRecorder()
        _, stats = RouteFinderService(line_graph, metrics_sink=sink).find_route("A", "D")
        assert sink.metrics == stats["metrics"]

    def test_from_data_uses_cost_source(self):
        nodes = make_nodes([("A", 0.0, 0.0, 0.0), ("B", 0.0, 0.001, 0.0)])
        edges = make_edges([("A", "B", 42.0)])

        service = RouteFinderService.from_data(nodes, edges, SearchPresets.provided_costs())
        _, stats = service.find_route("A", "B")
        assert stats["total_cost"] == 42.0

        computed = RouteFinderService.from_data(nodes, edges, SearchConfig())
        _, stats = computed.find_route("A", "B")
        assert stats["total_cost"] < 1

    def test_elevation_summary(self):
        nodes = make_nodes([
            ("A", 0.0, 0.000, 100.0),
            ("B", 0.0, 0.001, 150.0),
            ("C", 0.0, 0.002, 120.0),
        ])
        service = RouteFinderService.from_data(nodes, make_edges([("A", "B"), ("B", "C")]))
        stats = service.calculate_statistics(["A", "B", "C"])

        assert stats["elevation_gain_m"] == 50.0
        assert stats["elevation_loss_m"] == 30.0
        assert stats["waypoints"] == 3

    def test_single_node_route(self):
        nodes, edges = terrain_grid(2)
        path, stats = RouteFinderService.from_data(nodes, edges).find_route("r0c0", "r0c0")
        assert path == ["r0c0"]
        assert stats["distance_km"] == 0.0
        assert stats["elevation_gain_m"] == 0.0
