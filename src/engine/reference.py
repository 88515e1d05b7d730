"""
Ellipsoidal reference measurements relying on pyproj.

``pyproj.Geod`` integrates area and perimeter on the WGS84 ellipsoid. It is
slower than the local-plane engine and is only used to cross-check it.
"""

from typing import Tuple

from pyproj import Geod

from .geometry import Ring, canonical_ring, is_measurable

# Initialize once; Geod objects are reusable
GEOD = Geod(ellps="WGS84")


def reference_area_perimeter(ring: Ring) -> Tuple[float, float]:
    """
    Geodesic (area m², perimeter m) of the ring on WGS84.
    Area is unsigned; degenerate rings give (0.0, 0.0).
    """
    ring = canonical_ring(ring)
    if not is_measurable(ring):
        return 0.0, 0.0
    lons = [p.longitude for p in ring]
    lats = [p.latitude for p in ring]
    area, perimeter = GEOD.polygon_area_perimeter(lons, lats)
    return abs(area), perimeter


def reference_area(ring: Ring) -> float:
    return reference_area_perimeter(ring)[0]


def relative_deviation(area_m2: float, reference_m2: float) -> float:
    """
    |area_m2 - reference_m2| / reference_m2, or 0.0 when the reference is zero.
    """
    if reference_m2 == 0:
        return 0.0
    return abs(area_m2 - reference_m2) / reference_m2
