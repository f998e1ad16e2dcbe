#!/usr/bin/env python3
"""
Command-line tool for finding routes through a node/edge graph.

Usage:
    # Between two node ids:
    trailgraph-route nodes.csv edges.csv N12 N981

    # Between the nodes nearest to two coordinates:
    trailgraph-route nodes.csv edges.csv "Start: 40.6572, -111.5706" "End: 40.6486, -111.5639"

    # Bidirectional search with the optimal stopping rule:
    trailgraph-route --algorithm bidirectional --heuristic geodesic --stopping-rule optimal nodes.csv edges.csv N12 N981
"""

import argparse
import re
import sys
import time

from trailgraph.services.astar import HEURISTICS
from trailgraph.services.bidirectional import STOPPING_RULES
from trailgraph.services.csv_loader import load_graph
from trailgraph.services.graph_builder import COST_SOURCES
from trailgraph.services.instrumentation import LoggingMetricsSink
from trailgraph.services.route_finder import RouteFinderService
from trailgraph.services.search_config import ALGORITHMS, SearchConfig


class TimedStep:
    """Prints a step banner and how long the step took; ``duration`` holds the seconds afterwards"""
    def __init__(self, description):
        self.description = description
        self.start_time = None
        self.duration = None

    def __enter__(self):
        print(f"\n📍 {self.description}...")
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        status = "✓ Completed in" if exc_type is None else "✗ Failed after"
        print(f"   {status} {format_time(self.duration)}")


COORDINATE_PATTERN = re.compile(r'^\s*(?:[A-Za-z][\w ]*:)?\s*(-?\d+(?:\.\d*)?)\s*,\s*(-?\d+(?:\.\d*)?)\s*$')


def parse_coordinate(coord_str):
    """
    Parse an endpoint given as 'lat, lon', optionally labelled ('Start: 40.6572, -111.5706').
    Raises ValueError for anything else, including out-of-range values.
    """
    match = COORDINATE_PATTERN.match(coord_str)
    if not match:
        raise ValueError(f"Invalid coordinate format: {coord_str}")

    lat, lon = float(match.group(1)), float(match.group(2))
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise ValueError(f"Coordinate out of range: {lat}, {lon}")
    return lat, lon


def format_time(seconds):
    """Format time in human-readable way"""
    if seconds < 1:
        return f"{seconds*1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(seconds, 60)
    return f"{int(minutes)}m {secs:.0f}s"


def resolve_endpoint(graph, value):
    """A node id as-is, otherwise the node nearest to a coordinate ('lat, lon' or 'Label: lat, lon')"""
    if value in graph:
        return value
    lat, lon = parse_coordinate(value)
    node_id = graph.nearest_node(lat, lon)
    if node_id is None:
        raise ValueError("Graph has no nodes")
    print(f"   {lat}, {lon} -> nearest node {node_id}")
    return node_id


def build_parser():
    parser = argparse.ArgumentParser(
        description='Find routes between graph nodes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('nodes', help='Nodes CSV (id,lon,lat,elevation)')
    parser.add_argument('edges', help='Edges CSV (source,target[,cost])')
    parser.add_argument('start', help='Start node id, or a coordinate ("lat, lon" or "Start: lat, lon")')
    parser.add_argument('goal', help='Goal node id, or a coordinate ("lat, lon" or "End: lat, lon")')
    parser.add_argument('--algorithm', choices=ALGORITHMS, default='astar')
    parser.add_argument('--heuristic', choices=sorted(HEURISTICS), default='degrees')
    parser.add_argument('--stopping-rule', choices=STOPPING_RULES, default='first_meeting')
    parser.add_argument('--cost-source', choices=COST_SOURCES, default='computed')
    return parser


def main(argv=None):
    """Main CLI function"""
    args = build_parser().parse_args(argv)
    overall_start = time.time()

    config = SearchConfig(
        algorithm=args.algorithm,
        heuristic=args.heuristic,
        stopping_rule=args.stopping_rule,
        cost_source=args.cost_source
    )

    with TimedStep("Loading graph"):
        try:
            graph = load_graph(args.nodes, args.edges, config.cost_source)
        except FileNotFoundError as e:
            print(f"❌ {e}")
            return 1
        print(f"   {len(graph)} nodes, {graph.edge_count} edges ({len(graph.diagnostics)} dropped)")

    with TimedStep("Resolving endpoints"):
        try:
            start = resolve_endpoint(graph, args.start)
            goal = resolve_endpoint(graph, args.goal)
        except ValueError as e:
            print(f"❌ Unknown node or bad coordinate: {e}")
            return 1

    print("\n🧭 ROUTE FINDER")
    print("="*60)
    print(f"Algorithm: {config.algorithm} (heuristic={config.heuristic}, stopping rule={config.stopping_rule})")
    print(f"Start: {start}")
    print(f"Goal:  {goal}")
    print("-"*60)

    service = RouteFinderService(graph, config, metrics_sink=LoggingMetricsSink())
    with TimedStep("Running pathfinding algorithm"):
        path, stats = service.find_route(start, goal)

    if not path:
        print(f"\n❌ {stats.get('error', 'No route found')} (total time: {format_time(time.time() - overall_start)})")
        return 2

    print(f"\n✅ ROUTE FOUND!")
    print("="*60)
    print(f"   Path:             {' -> '.join(path)}")
    print(f"   Waypoints:        {stats['waypoints']}")
    print(f"   Total cost:       {stats['total_cost']:.2f}")
    print(f"   Distance:         {stats['distance_km']:.2f} km")
    print(f"   Elevation gain:   {stats['elevation_gain_m']:.0f}m")
    print(f"   Elevation loss:   {stats['elevation_loss_m']:.0f}m")

    print(f"\n⚡ SEARCH METRICS")
    print("-"*60)
    for name, value in stats['metrics'].items():
        print(f"  {name}: {value}")

    print("\n" + "="*60)
    print(f"✓ Complete! Total time: {format_time(time.time() - overall_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
