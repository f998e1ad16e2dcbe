"""
Builds the node index and symmetric adjacency list that every search runs on
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from trailgraph.errors import MissingEndpoint
from trailgraph.models.route import Edge, Node
from trailgraph.services import cost_model

logger = logging.getLogger(__name__)

COST_SOURCES = ("computed", "provided")


class RouteGraph:
    """Node index plus adjacency list. Read-only once built."""

    def __init__(self, nodes: Dict[str, Node], adjacency: Dict[str, List[Tuple[str, float]]],
                 diagnostics: Optional[List[MissingEndpoint]] = None):
        self.nodes = nodes
        self.adjacency = adjacency
        self.diagnostics = diagnostics or []
        self._coords = None

    def __contains__(self, node_id) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        """Number of undirected edges"""
        return sum(len(v) for v in self.adjacency.values()) // 2

    def node(self, node_id) -> Node:
        return self.nodes[node_id]

    def neighbors(self, node_id) -> List[Tuple[str, float]]:
        return self.adjacency.get(node_id, [])

    def edge_cost(self, a, b) -> Optional[float]:
        """Cheapest stored cost for the edge a-b, or None if they are not adjacent"""
        costs = [cost for neighbor, cost in self.neighbors(a) if neighbor == b]
        return min(costs) if costs else None

    def path_cost(self, path: List[str]) -> float:
        """Sum of stored edge costs along ``path``"""
        total = 0.0
        for a, b in zip(path, path[1:]):
            cost = self.edge_cost(a, b)
            if cost is None:
                raise ValueError(f"Nodes {a} and {b} are not adjacent")
            total += cost
        return total

    def is_symmetric(self) -> bool:
        """True if every (a, b, cost) entry has a matching (b, a, cost)"""
        for a, entries in self.adjacency.items():
            for b, cost in entries:
                if (a, cost) not in self.adjacency.get(b, []):
                    return False
        return True

    def bounds(self) -> Optional[Dict[str, float]]:
        """Bounding box of all nodes"""
        if not self.nodes:
            return None
        coords = self._coordinate_array()
        return {
            "min_lat": float(coords[:, 0].min()),
            "max_lat": float(coords[:, 0].max()),
            "min_lon": float(coords[:, 1].min()),
            "max_lon": float(coords[:, 1].max())
        }

    def nearest_node(self, lat: float, lon: float) -> Optional[str]:
        """Id of the node closest to (lat, lon) in raw degree distance"""
        if not self.nodes:
            return None
        coords = self._coordinate_array()
        distances = np.hypot(coords[:, 0] - lat, coords[:, 1] - lon)
        return self._node_ids[int(np.argmin(distances))]

    def _coordinate_array(self) -> np.ndarray:
        if self._coords is None:
            self._node_ids = list(self.nodes)
            self._coords = np.array([[n.lat, n.lon] for n in self.nodes.values()], dtype=np.float64)
        return self._coords


class GraphBuilder:
    """Turns raw node and edge lists into a RouteGraph"""

    def __init__(self, cost_source: str = "computed"):
        if cost_source not in COST_SOURCES:
            raise ValueError(f"cost_source must be one of {COST_SOURCES}, got {cost_source!r}")
        self.cost_source = cost_source

    def build(self, nodes: Iterable, edges: Iterable) -> RouteGraph:
        """
        Build the graph.

        Edges with an endpoint missing from ``nodes`` are dropped and recorded as
        MissingEndpoint diagnostics; construction carries on with the rest.
        Every retained edge is inserted in both directions with the same cost.
        """
        node_index: Dict[str, Node] = {}
        for raw in nodes:
            node = raw if isinstance(raw, Node) else Node.model_validate(raw)
            if node.id in node_index:
                logger.warning(f"Duplicate node id {node.id}, keeping the later definition")
            node_index[node.id] = node

        adjacency: Dict[str, List[Tuple[str, float]]] = {}
        diagnostics: List[MissingEndpoint] = []

        for raw in edges:
            edge = raw if isinstance(raw, Edge) else Edge.model_validate(raw)
            source_node = node_index.get(edge.source)
            target_node = node_index.get(edge.target)
            if source_node is None or target_node is None:
                missing = [node_id for node_id, node in ((edge.source, source_node), (edge.target, target_node))
                           if node is None]
                diagnostic = MissingEndpoint(edge.source, edge.target, missing)
                logger.warning(str(diagnostic))
                diagnostics.append(diagnostic)
                continue

            cost = self._edge_cost(edge, source_node, target_node)
            adjacency.setdefault(edge.source, []).append((edge.target, cost))
            adjacency.setdefault(edge.target, []).append((edge.source, cost))

        graph = RouteGraph(node_index, adjacency, diagnostics)
        logger.info(f"Built graph with {len(graph)} nodes, {graph.edge_count} edges "
                    f"({len(diagnostics)} edges dropped)")
        return graph

    def _edge_cost(self, edge: Edge, source_node: Node, target_node: Node) -> float:
        if self.cost_source == "provided" and edge.cost is not None:
            return edge.cost
        return cost_model.edge_cost(source_node, target_node)


def build_graph(nodes: Iterable, edges: Iterable, cost_source: str = "computed") -> RouteGraph:
    return GraphBuilder(cost_source=cost_source).build(nodes, edges)
