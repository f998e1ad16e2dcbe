"""
Traversal cost between adjacent nodes: geodesic distance plus an elevation penalty
"""

import math
from typing import Sequence

import numpy as np

# Degrees of arc -> statute miles -> kilometers. Applied in this order so results
# stay identical to the reference datasets.
NAUTICAL_MILES_PER_DEGREE = 60
STATUTE_MILES_PER_NAUTICAL_MILE = 1.1515
KM_PER_MILE = 1.609344

CLIMB_COST_PER_METER = 0.01
DESCENT_COST_PER_METER = -0.005


def great_circle_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Spherical law of cosines distance in kilometers"""
    rad_lat1 = math.pi * lat1 / 180
    rad_lat2 = math.pi * lat2 / 180
    theta = lon1 - lon2
    rad_theta = math.pi * theta / 180
    dist = math.sin(rad_lat1) * math.sin(rad_lat2) + math.cos(rad_lat1) * math.cos(rad_lat2) * math.cos(rad_theta)
    # Rounding can push coincident points just past 1.0
    dist = math.acos(min(1.0, max(-1.0, dist)))
    dist = dist * 180 / math.pi
    dist = dist * NAUTICAL_MILES_PER_DEGREE * STATUTE_MILES_PER_NAUTICAL_MILE
    return dist * KM_PER_MILE


def elevation_penalty(elevation_difference: float) -> float:
    """
    Penalty for changing elevation by ``elevation_difference`` meters.

    Climbing costs 0.01 per meter. Anything else is multiplied by -0.005, so a
    descent (negative difference) also yields a positive penalty, half the
    climbing rate.
    """
    if elevation_difference > 0:
        return elevation_difference * CLIMB_COST_PER_METER
    return elevation_difference * DESCENT_COST_PER_METER


def edge_cost(origin, destination) -> float:
    """Cost of moving from ``origin`` to ``destination`` (directional)"""
    dist = great_circle_km(origin.lat, origin.lon, destination.lat, destination.lon)
    return dist + elevation_penalty(destination.elevation - origin.elevation)


def segment_distances_km(nodes: Sequence) -> np.ndarray:
    """great_circle_km between each pair of consecutive nodes"""
    lat = np.array([n.lat for n in nodes], dtype=np.float64)
    lon = np.array([n.lon for n in nodes], dtype=np.float64)
    if len(lat) < 2:
        return np.zeros(0)

    rad_lat = np.pi * lat / 180
    rad_theta = np.pi * (lon[:-1] - lon[1:]) / 180
    dist = (np.sin(rad_lat[:-1]) * np.sin(rad_lat[1:])
            + np.cos(rad_lat[:-1]) * np.cos(rad_lat[1:]) * np.cos(rad_theta))
    dist = np.arccos(np.clip(dist, -1.0, 1.0))
    dist = dist * 180 / np.pi
    return dist * NAUTICAL_MILES_PER_DEGREE * STATUTE_MILES_PER_NAUTICAL_MILE * KM_PER_MILE


def segment_climbs_m(nodes: Sequence) -> np.ndarray:
    """Elevation change between each pair of consecutive nodes"""
    return np.diff(np.array([n.elevation for n in nodes], dtype=np.float64))


def path_cost(nodes: Sequence) -> float:
    """Sum of edge_cost over consecutive nodes, computed in one vectorised pass"""
    if len(nodes) < 2:
        return 0.0

    climb = segment_climbs_m(nodes)
    penalty = np.where(climb > 0, climb * CLIMB_COST_PER_METER, climb * DESCENT_COST_PER_METER)

    return float(np.sum(segment_distances_km(nodes) + penalty))


def degree_distance(node_a, node_b) -> float:
    """Straight-line distance in raw latitude/longitude degrees"""
    return math.hypot(node_a.lat - node_b.lat, node_a.lon - node_b.lon)
