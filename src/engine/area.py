"""
Parcel area on a local tangent plane scaled by the WGS84 radii of curvature.

A parcel spans a negligible latitude range, so a single reference latitude
(the vertex mean) fixes the meters-per-degree scale in both directions:

    meridian:        M = a(1 - e²) / (1 - e² sin²φ₀)^1.5
    prime vertical:  N = a / sqrt(1 - e² sin²φ₀)

    m_per_deg_lat = (π/180) · M
    m_per_deg_lng = (π/180) · N · cos φ₀

Vertices are projected to planar meters and measured with the shoelace
formula. The sign of the shoelace sum only encodes winding and is dropped.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from shared.constants import WGS84_A, WGS84_E2
from .geometry import Ring, canonical_ring, is_measurable, mean_latitude

logger = logging.getLogger(__name__)

_DEG = math.pi / 180


@dataclass(frozen=True)
class AreaMeasurement:
    area_square_meters: float


def local_scale_factors(latitude_deg: float) -> Tuple[float, float]:
    """
    Meters per degree of (longitude, latitude) at the given latitude.
    """
    phi = math.radians(latitude_deg)
    sin_phi = math.sin(phi)
    w2 = 1 - WGS84_E2 * sin_phi * sin_phi

    m_per_deg_lng = _DEG * WGS84_A * math.cos(phi) / math.sqrt(w2)
    m_per_deg_lat = _DEG * WGS84_A * (1 - WGS84_E2) / w2 ** 1.5
    return m_per_deg_lng, m_per_deg_lat


def project_ring(ring: Ring) -> List[Tuple[float, float]]:
    """
    Project a canonical ring to planar (x, y) meters around its mean latitude.

    The plane's origin sits on the first vertex. Shoelace sums over a closed
    ring do not depend on the origin, and small offsets keep the cross
    products well conditioned.
    """
    if not ring:
        return []
    kx, ky = local_scale_factors(mean_latitude(ring))
    lng0, lat0 = ring[0].longitude, ring[0].latitude
    return [((p.longitude - lng0) * kx, (p.latitude - lat0) * ky) for p in ring]


def shoelace(xy: List[Tuple[float, float]]) -> float:
    """Signed planar area of an implicitly closed polygon (positive when CCW)."""
    n = len(xy)
    total = 0.0
    for i in range(n):
        x1, y1 = xy[i]
        x2, y2 = xy[(i + 1) % n]
        total += x1 * y2 - x2 * y1
    return 0.5 * total


def compute_area(ring: Ring) -> AreaMeasurement:
    """
    Area of the parcel enclosed by ``ring`` in square meters.

    Open and explicitly closed rings give identical results. Rings with fewer
    than three distinct vertices measure 0.0 instead of raising.
    """
    ring = canonical_ring(ring)
    if not is_measurable(ring):
        logger.debug("Ring has fewer than 3 distinct vertices; area is 0")
        return AreaMeasurement(0.0)

    return AreaMeasurement(abs(shoelace(project_ring(ring))))


def spherical_excess_area(ring: Ring, radius: float = WGS84_A) -> float:
    """
    Earlier spherical estimate of the enclosed area in square meters.

    Sums Δλ·(2 + sin φ₁ + sin φ₂) over the edges on a sphere of ``radius``
    (the WGS84 equatorial radius by default). Kept for comparison with
    records measured before the ellipsoidal method; reads about half a
    percent high near the tropics.
    """
    ring = canonical_ring(ring)
    if not is_measurable(ring):
        return 0.0

    n = len(ring)
    total = 0.0
    for i in range(n):
        p1 = ring[i]
        p2 = ring[(i + 1) % n]
        total += math.radians(p2.longitude - p1.longitude) * (
            2 + math.sin(math.radians(p1.latitude)) + math.sin(math.radians(p2.latitude))
        )
    return abs(total * radius * radius / 2.0)
