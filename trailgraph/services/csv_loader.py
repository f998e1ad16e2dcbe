"""
Loads node and edge lists from the headerless CSV files the datasets ship as:

    nodes.csv: id,lon,lat,elevation
    edges.csv: source,target[,cost]
"""

import logging
import os
from typing import List

import pandas as pd

from trailgraph.models.route import Edge, Node
from trailgraph.services.graph_builder import GraphBuilder, RouteGraph

logger = logging.getLogger(__name__)

NODE_COLUMNS = ["id", "lon", "lat", "elevation"]
EDGE_COLUMNS = ["source", "target", "cost"]


def load_nodes_csv(path) -> List[Node]:
    """Read nodes, skipping rows whose latitude or longitude is not numeric"""
    frame = pd.read_csv(path, header=None, names=NODE_COLUMNS, dtype={"id": str}, skipinitialspace=True)
    for column in ("lon", "lat", "elevation"):
        frame[column] = pd.to_numeric(frame[column], errors="coerce")

    invalid = frame["lat"].isna() | frame["lon"].isna()
    if invalid.any():
        logger.warning(f"Skipping {int(invalid.sum())} node rows without numeric coordinates in {path}")
    frame = frame[~invalid].copy()
    frame["elevation"] = frame["elevation"].fillna(0.0)

    return [
        Node(id=row.id, lat=float(row.lat), lon=float(row.lon), elevation=float(row.elevation))
        for row in frame.itertuples(index=False)
    ]


def load_edges_csv(path) -> List[Edge]:
    """Read edges; a missing, non-numeric or negative cost becomes None"""
    frame = pd.read_csv(path, header=None, names=EDGE_COLUMNS, dtype={"source": str, "target": str},
                        skipinitialspace=True)
    frame["cost"] = pd.to_numeric(frame["cost"], errors="coerce")

    negative = frame["cost"] < 0
    if negative.any():
        logger.warning(f"Ignoring {int(negative.sum())} negative edge costs in {path}")
        frame.loc[negative, "cost"] = float("nan")

    return [
        Edge(source=row.source, target=row.target, cost=None if pd.isna(row.cost) else float(row.cost))
        for row in frame.itertuples(index=False)
    ]


def load_graph(nodes_path, edges_path, cost_source: str = "computed") -> RouteGraph:
    """Load both files and build the graph"""
    for path in (nodes_path, edges_path):
        if not os.path.exists(path):
            raise FileNotFoundError(f"Graph data file not found: {path}")

    nodes = load_nodes_csv(nodes_path)
    edges = load_edges_csv(edges_path)
    logger.info(f"Loaded {len(nodes)} nodes from {nodes_path} and {len(edges)} edges from {edges_path}")

    return GraphBuilder(cost_source=cost_source).build(nodes, edges)
