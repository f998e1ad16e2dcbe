from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Literal


class Node(BaseModel):
    """A graph node; immutable once built"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Node identifier, unique within a graph")
    lat: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in degrees")
    elevation: float = Field(0.0, description="Elevation in meters")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return v if isinstance(v, str) else str(v)


class Edge(BaseModel):
    """An undirected connection between two node ids"""
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    cost: Optional[float] = Field(None, ge=0, description="Explicit traversal cost, never negative")

    @field_validator('source', 'target', mode='before')
    @classmethod
    def coerce_ids(cls, v):
        return v if isinstance(v, str) else str(v)


class RouteOptions(BaseModel):
    algorithm: Literal["astar", "bidirectional", "dijkstra"] = Field(
        "astar", description="Search strategy"
    )
    heuristic: Literal["degrees", "geodesic", "zero"] = Field(
        "degrees", description="Heuristic used to order the frontier"
    )
    stoppingRule: Literal["first_meeting", "optimal"] = Field(
        "first_meeting", description="Bidirectional termination rule"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "algorithm": "bidirectional",
                "heuristic": "geodesic",
                "stoppingRule": "optimal"
            }
        }
    )


class RouteRequest(BaseModel):
    startId: str
    goalId: str
    options: RouteOptions = Field(default_factory=RouteOptions)

    @field_validator('startId', 'goalId', mode='before')
    @classmethod
    def coerce_ids(cls, v):
        return v if isinstance(v, str) else str(v)


class RouteResult(BaseModel):
    path: List[str]
    stats: dict


class GraphPayload(BaseModel):
    nodes: List[Node]
    edges: List[Edge]
    costSource: Literal["computed", "provided"] = Field(
        "computed", description="Use CostModel or the edge's own cost"
    )


class GraphSummary(BaseModel):
    nodes: int
    edges: int
    droppedEdges: int
    bounds: Optional[Dict[str, float]] = None


class NearestNodeResponse(BaseModel):
    nodeId: str
    lat: float
    lon: float
    elevation: float
