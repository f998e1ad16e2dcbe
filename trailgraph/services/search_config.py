"""
Search configuration.
Selects the search strategy, its heuristic and termination rule, and where edge costs come from.
"""

from dataclasses import dataclass, replace

from trailgraph.services.astar import HEURISTICS
from trailgraph.services.bidirectional import STOPPING_RULES
from trailgraph.services.graph_builder import COST_SOURCES

ALGORITHMS = ("astar", "bidirectional", "dijkstra")


@dataclass
class SearchConfig:
    """Configuration for one route finder"""

    algorithm: str = "astar"
    heuristic: str = "degrees"
    stopping_rule: str = "first_meeting"  # bidirectional only
    cost_source: str = "computed"  # used when building the graph

    def __post_init__(self):
        self._check("algorithm", self.algorithm, ALGORITHMS)
        self._check("heuristic", self.heuristic, tuple(HEURISTICS))
        self._check("stopping_rule", self.stopping_rule, STOPPING_RULES)
        self._check("cost_source", self.cost_source, COST_SOURCES)

    @staticmethod
    def _check(field_name, value, allowed):
        if value not in allowed:
            raise ValueError(f"{field_name} must be one of {allowed}, got {value!r}")

    def with_overrides(self, **overrides) -> "SearchConfig":
        """Copy of this config with the non-None overrides applied"""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class SearchPresets:
    """Preset configurations for common trade-offs"""

    @staticmethod
    def reference() -> SearchConfig:
        """A* with the raw-degree heuristic on computed costs"""
        return SearchConfig()

    @staticmethod
    def bidirectional() -> SearchConfig:
        """Bidirectional search stopping at the first meeting node"""
        return SearchConfig(algorithm="bidirectional")

    @staticmethod
    def strict_optimal() -> SearchConfig:
        """Bidirectional search with a consistent heuristic and the optimal stopping rule"""
        return SearchConfig(algorithm="bidirectional", heuristic="geodesic", stopping_rule="optimal")

    @staticmethod
    def dijkstra() -> SearchConfig:
        """Uniform-cost search; exact for any non-negative costs"""
        return SearchConfig(algorithm="dijkstra", heuristic="zero")

    @staticmethod
    def provided_costs() -> SearchConfig:
        """Trust costs shipped with the edge data. Degree heuristics are not unit-matched here, so use Dijkstra."""
        return SearchConfig(algorithm="dijkstra", heuristic="zero", cost_source="provided")
