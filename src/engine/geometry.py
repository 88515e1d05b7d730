"""
Ring value types and boundary normalisation.

Map widgets and persisted parcel records hand us loosely-typed geometry:
Leaflet LatLng dicts (sometimes wrapped in an extra list for the outer ring),
``{"latitude": .., "longitude": ..}`` records, ``(lat, lng)`` pairs, or GeoJSON
polygons in ``[lng, lat]`` order. Everything is converted here into a tuple of
``GeoPoint`` before it reaches the measurement functions.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, Tuple

from shared.constants import LAT_RANGE, LNG_RANGE, MIN_RING_VERTICES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def as_dict(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude}


Ring = Sequence[GeoPoint]

_LAT_KEYS = ("lat", "latitude")
_LNG_KEYS = ("lng", "lon", "longitude")


def _pick(mapping: Mapping, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in mapping:
            return mapping[key]
    raise ValueError(f"point is missing one of {keys}: {dict(mapping)!r}")


def _as_float(value: Any) -> float:
    # bool is an int subclass; a True latitude is never intended
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"coordinate must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"coordinate out of float range: {value!r}") from None


def to_geopoint(value: Any) -> GeoPoint:
    """Convert a GeoPoint, a lat/lng mapping or a ``(lat, lng)`` pair."""
    if isinstance(value, GeoPoint):
        return value
    if isinstance(value, Mapping):
        return GeoPoint(_as_float(_pick(value, _LAT_KEYS)), _as_float(_pick(value, _LNG_KEYS)))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return GeoPoint(_as_float(value[0]), _as_float(value[1]))
    raise ValueError(f"cannot interpret {value!r} as a point")


def _is_nested_ring(points: Sequence[Any]) -> bool:
    first = points[0]
    if not isinstance(first, (list, tuple)) or not first:
        return False
    return isinstance(first[0], (Mapping, list, tuple, GeoPoint))


def ring_from_points(points: Iterable[Any]) -> Tuple[GeoPoint, ...]:
    """
    Build a ring from map-widget style vertices.

    Accepts a flat vertex list or Leaflet's nested ``[[...outer ring...]]``
    shape, in which case only the outer ring is used.
    """
    if points is None or isinstance(points, (str, bytes, Mapping)):
        raise ValueError("coordinates must be a list of points")
    try:
        points = list(points)
    except TypeError:
        raise ValueError(f"coordinates must be a list of points, got {points!r}") from None
    if points and _is_nested_ring(points):
        points = list(points[0])
    return tuple(to_geopoint(p) for p in points)


def ring_from_geojson(obj: Mapping[str, Any]) -> Tuple[GeoPoint, ...]:
    """
    Build a ring from a GeoJSON Polygon (or a Feature wrapping one).

    GeoJSON positions are ``[lng, lat(, alt)]``; only the exterior ring is read.
    """
    if not isinstance(obj, Mapping):
        raise ValueError("geojson must be an object")
    if obj.get("type") == "Feature":
        obj = obj.get("geometry") or {}
        if not isinstance(obj, Mapping):
            raise ValueError("feature geometry must be an object")
    if obj.get("type") != "Polygon":
        raise ValueError(f"unsupported geojson type: {obj.get('type')!r}")

    rings = obj.get("coordinates")
    if not isinstance(rings, list) or not rings:
        raise ValueError("polygon has no coordinates")
    if not isinstance(rings[0], list):
        raise ValueError(f"exterior ring must be a list, got {rings[0]!r}")

    points = []
    for position in rings[0]:
        if not isinstance(position, (list, tuple)) or len(position) < 2:
            raise ValueError(f"invalid position {position!r}")
        points.append(GeoPoint(_as_float(position[1]), _as_float(position[0])))
    return tuple(points)


def canonical_ring(ring: Ring) -> Tuple[GeoPoint, ...]:
    """Drop an explicit closing vertex so open and closed rings measure the same."""
    ring = tuple(ring)
    if len(ring) >= 2 and ring[-1] == ring[0]:
        logger.debug("Dropping closing vertex from explicitly closed ring")
        return ring[:-1]
    return ring


def distinct_vertex_count(ring: Ring) -> int:
    return len(set(ring))


def is_measurable(ring: Ring) -> bool:
    """True when the ring has the three distinct vertices a parcel needs."""
    return distinct_vertex_count(ring) >= MIN_RING_VERTICES


def validate_ring(ring: Ring) -> None:
    """
    Caller-side range check. The measurement functions never call this;
    it exists for the layers that accept coordinates from outside.
    """
    for index, point in enumerate(ring):
        lat, lng = point.latitude, point.longitude
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ValueError(f"vertex {index} is not finite: ({lat}, {lng})")
        if not (LAT_RANGE[0] <= lat <= LAT_RANGE[1]):
            raise ValueError(f"vertex {index} latitude {lat} outside {LAT_RANGE}")
        if not (LNG_RANGE[0] <= lng <= LNG_RANGE[1]):
            raise ValueError(f"vertex {index} longitude {lng} outside {LNG_RANGE}")


def mean_latitude(ring: Ring) -> float:
    """Arithmetic mean latitude in degrees (0.0 for an empty ring)."""
    if not ring:
        return 0.0
    return sum(p.latitude for p in ring) / len(ring)


def centroid(ring: Ring) -> GeoPoint:
    """Vertex mean of the canonical ring, used as the parcel anchor."""
    ring = canonical_ring(ring)
    if not ring:
        raise ValueError("centroid of an empty ring is undefined")
    lng = sum(p.longitude for p in ring) / len(ring)
    return GeoPoint(mean_latitude(ring), lng)
