"""
Elevation-aware route finding over geospatial node graphs.
"""

from trailgraph.errors import InvalidNodeReference, MissingEndpoint, NoPathExists, RouteError
from trailgraph.models.route import Edge, Node
from trailgraph.services.astar import AStarPathfinder, DijkstraPathfinder
from trailgraph.services.bidirectional import BidirectionalPathfinder
from trailgraph.services.graph_builder import GraphBuilder, RouteGraph, build_graph
from trailgraph.services.instrumentation import LoggingMetricsSink, MetricsRecorder
from trailgraph.services.route_finder import RouteFinderService, create_pathfinder
from trailgraph.services.search_config import SearchConfig, SearchPresets

__version__ = "1.0.0"
