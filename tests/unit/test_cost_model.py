"""
Tests for the traversal cost model
"""

import math

import pytest

from trailgraph.models.route import Node
from trailgraph.services import cost_model

KM_PER_DEGREE = 60 * 1.1515 * 1.609344


@pytest.mark.unit
class TestGreatCircle:
    """Distance component"""

    def test_one_degree_of_latitude(self):
        assert cost_model.great_circle_km(0, 0, 1, 0) == pytest.approx(KM_PER_DEGREE, rel=1e-9)

    def test_one_degree_of_longitude_on_equator(self):
        assert cost_model.great_circle_km(0, 0, 0, 1) == pytest.approx(KM_PER_DEGREE, rel=1e-9)

    def test_coincident_points(self):
        # Must not raise even when rounding pushes the acos argument past 1
        assert cost_model.great_circle_km(40.6572, -111.5706, 40.6572, -111.5706) == pytest.approx(0, abs=1e-3)

    def test_symmetric(self):
        forward = cost_model.great_circle_km(40.6572, -111.5706, 40.6486, -111.5639)
        backward = cost_model.great_circle_km(40.6486, -111.5639, 40.6572, -111.5706)
        assert forward == pytest.approx(backward)
        assert 1.0 < forward < 1.2  # ~1.1 km apart

    def test_matches_reference_pipeline(self):
        lat1, lon1, lat2, lon2 = 40.6572, -111.5706, 40.6486, -111.5639
        rad_lat1 = math.pi * lat1 / 180
        rad_lat2 = math.pi * lat2 / 180
        rad_theta = math.pi * (lon1 - lon2) / 180
        dist = math.acos(math.sin(rad_lat1) * math.sin(rad_lat2)
                         + math.cos(rad_lat1) * math.cos(rad_lat2) * math.cos(rad_theta))
        expected = dist * 180 / math.pi * 60 * 1.1515 * 1.609344
        assert cost_model.great_circle_km(lat1, lon1, lat2, lon2) == expected


@pytest.mark.unit
class TestElevationPenalty:
    """Elevation component, including its sign convention"""

    def test_climb(self):
        assert cost_model.elevation_penalty(100) == pytest.approx(1.0)

    def test_descent_is_positive(self):
        # -100 * -0.005 = +0.5
        assert cost_model.elevation_penalty(-100) == pytest.approx(0.5)

    def test_flat(self):
        assert cost_model.elevation_penalty(0) == 0


@pytest.mark.unit
class TestEdgeCost:
    """Combined cost"""

    def test_asymmetric_by_direction(self):
        low = Node(id="low", lat=40.0, lon=-111.0, elevation=1000)
        high = Node(id="high", lat=40.0, lon=-110.99, elevation=1100)

        up = cost_model.edge_cost(low, high)
        down = cost_model.edge_cost(high, low)

        assert up - down == pytest.approx(0.5)
        assert up == pytest.approx(cost_model.great_circle_km(40.0, -111.0, 40.0, -110.99) + 1.0)

    def test_path_cost_matches_edge_sum(self):
        nodes = [
            Node(id="a", lat=40.650, lon=-111.570, elevation=2000),
            Node(id="b", lat=40.651, lon=-111.569, elevation=2040),
            Node(id="c", lat=40.652, lon=-111.569, elevation=2010),
            Node(id="d", lat=40.652, lon=-111.567, elevation=2010),
        ]
        expected = sum(cost_model.edge_cost(a, b) for a, b in zip(nodes, nodes[1:]))
        assert cost_model.path_cost(nodes) == pytest.approx(expected, rel=1e-6)

    def test_path_cost_short_paths(self):
        node = Node(id="a", lat=1.0, lon=1.0)
        assert cost_model.path_cost([]) == 0.0
        assert cost_model.path_cost([node]) == 0.0

    def test_degree_distance(self):
        a = Node(id="a", lat=0.0, lon=0.0)
        b = Node(id="b", lat=3.0, lon=4.0)
        assert cost_model.degree_distance(a, b) == pytest.approx(5.0)
