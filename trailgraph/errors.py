"""
Error types for graph construction and route searches.

Only InvalidNodeReference is ever raised. MissingEndpoint is collected on the
built graph and NoPathExists is attached to an empty search result.
"""


class RouteError(Exception):
    """Base class for route finding errors"""


class MissingEndpoint(RouteError):
    """An edge references a node id that is not in the node index"""

    def __init__(self, source, target, missing):
        self.source = source
        self.target = target
        self.missing = tuple(missing)
        super().__init__(f"Missing node for edge: {source}, {target} (unknown: {', '.join(self.missing)})")


class NoPathExists(RouteError):
    """The goal cannot be reached from the start"""

    def __init__(self, start, goal):
        self.start = start
        self.goal = goal
        super().__init__(f"No path found from {start} to {goal}")


class InvalidNodeReference(RouteError):
    """A search was requested for a node id the graph does not know"""

    def __init__(self, node_id):
        self.node_id = node_id
        super().__init__(f"Unknown node id: {node_id}")
