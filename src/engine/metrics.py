"""
Edge length and perimeter calculation utilities.
"""

from dataclasses import dataclass
from math import radians, sin, cos, sqrt, atan2
from typing import List

from shared.constants import MEAN_EARTH_RADIUS_M
from .geometry import GeoPoint, Ring, canonical_ring


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate the distance in meters between two WGS84 coordinates.
    """
    R = MEAN_EARTH_RADIUS_M
    dlat = radians(lat2 - lat1)
    dlng = radians(lng2 - lng1)

    a = sin(dlat/2)**2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng/2)**2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return R * c


@dataclass(frozen=True)
class EdgeMeasurement:
    from_index: int
    to_index: int
    length_meters: float
    midpoint: GeoPoint  # label anchor on the map


def compute_edge_lengths(ring: Ring) -> List[EdgeMeasurement]:
    """
    Haversine length of every ring edge, in vertex order.

    Edge ``i`` joins vertex ``i`` to vertex ``(i + 1) % n``, so a ring of n
    points yields n edges including the wrap-back edge. A two-point path
    therefore reports the same segment twice; fewer than two points yield
    no edges.
    """
    ring = canonical_ring(ring)
    n = len(ring)
    if n < 2:
        return []

    edges = []
    for i in range(n):
        j = (i + 1) % n
        p1, p2 = ring[i], ring[j]
        edges.append(EdgeMeasurement(
            from_index=i,
            to_index=j,
            length_meters=haversine_m(p1.latitude, p1.longitude, p2.latitude, p2.longitude),
            midpoint=GeoPoint((p1.latitude + p2.latitude) / 2, (p1.longitude + p2.longitude) / 2),
        ))
    return edges


def perimeter_m(ring: Ring) -> float:
    """
    Closed-ring perimeter in meters (0.0 for fewer than three points).
    """
    if len(canonical_ring(ring)) < 3:
        return 0.0
    return sum(e.length_meters for e in compute_edge_lengths(ring))
