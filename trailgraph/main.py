from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, Optional
import logging
import os

from trailgraph.models.route import (
    GraphPayload, GraphSummary, NearestNodeResponse,
    RouteRequest, RouteResult
)
from trailgraph.services.csv_loader import load_graph
from trailgraph.services.graph_builder import GraphBuilder, RouteGraph
from trailgraph.services.instrumentation import LoggingMetricsSink
from trailgraph.services.route_finder import RouteFinderService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Trail Graph API",
    description="API for finding elevation-aware routes over a node graph",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# The loaded graph and the service wrapping it. Replaced wholesale on reload, never mutated.
graph_storage: Dict[str, RouteFinderService] = {}

NODES_CSV_ENV = "TRAILGRAPH_NODES_CSV"
EDGES_CSV_ENV = "TRAILGRAPH_EDGES_CSV"
COST_SOURCE_ENV = "TRAILGRAPH_COST_SOURCE"


def set_graph(graph: RouteGraph):
    graph_storage["service"] = RouteFinderService(graph, metrics_sink=LoggingMetricsSink())


def get_service() -> RouteFinderService:
    service = graph_storage.get("service")
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No graph loaded"
        )
    return service


def summarize(graph: RouteGraph) -> GraphSummary:
    return GraphSummary(
        nodes=len(graph),
        edges=graph.edge_count,
        droppedEdges=len(graph.diagnostics),
        bounds=graph.bounds()
    )


@app.on_event("startup")
async def startup_event():
    """Load the graph named by the environment, if any"""
    nodes_path = os.environ.get(NODES_CSV_ENV)
    edges_path = os.environ.get(EDGES_CSV_ENV)
    if not nodes_path or not edges_path:
        logger.info("No graph files configured; waiting for POST /api/graph")
        return

    graph = load_graph(nodes_path, edges_path, os.environ.get(COST_SOURCE_ENV, "computed"))
    set_graph(graph)
    logger.info(f"Graph preloaded from {nodes_path} and {edges_path}")


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "trailgraph-api",
        "graphLoaded": "service" in graph_storage
    }


@app.post("/api/graph", response_model=GraphSummary, status_code=status.HTTP_201_CREATED)
async def load_graph_data(payload: GraphPayload):
    """Build a graph from node and edge lists and make it the active graph"""
    graph = GraphBuilder(cost_source=payload.costSource).build(payload.nodes, payload.edges)
    set_graph(graph)
    return summarize(graph)


@app.get("/api/graph", response_model=GraphSummary)
async def get_graph_summary():
    return summarize(get_service().graph)


@app.get("/api/graph/nearest", response_model=NearestNodeResponse)
async def nearest_node(lat: float = Query(..., ge=-90, le=90), lon: float = Query(..., ge=-180, le=180)):
    """Node closest to a coordinate, for picking route endpoints"""
    graph = get_service().graph
    node_id = graph.nearest_node(lat, lon)
    if node_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Graph has no nodes")
    node = graph.node(node_id)
    return NearestNodeResponse(nodeId=node.id, lat=node.lat, lon=node.lon, elevation=node.elevation)


@app.post("/api/routes/find", response_model=RouteResult)
async def find_route(request: RouteRequest):
    """Find a route between two node ids"""
    service = get_service()

    error: Optional[str] = service.validate_route_request(request.startId, request.goalId)
    if error:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error)

    options = {
        "algorithm": request.options.algorithm,
        "heuristic": request.options.heuristic,
        "stopping_rule": request.options.stoppingRule
    }
    path, stats = service.find_route(request.startId, request.goalId, options)
    return RouteResult(path=path, stats=stats)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
