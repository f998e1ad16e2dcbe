"""
Pytest configuration and shared fixtures
"""

import pytest
import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Import all fixtures from graph_fixtures
from tests.fixtures.graph_fixtures import (
    line_graph,
    two_node_graph,
    isolated_graph,
    heuristic_trap_graph,
    detour_graph,
    terrain_graph,
    small_terrain_graph
)
from tests.fixtures.csv_fixtures import graph_csv_files

# Re-export all fixtures
__all__ = [
    'line_graph',
    'two_node_graph',
    'isolated_graph',
    'heuristic_trap_graph',
    'detour_graph',
    'terrain_graph',
    'small_terrain_graph',
    'graph_csv_files'
]
