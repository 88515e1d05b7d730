import logging
import time
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException, Body
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from engine.area import compute_area
from engine.formatting import AREA_DISPLAY, format_distance, format_quantity
from engine.geometry import (
    GeoPoint,
    canonical_ring,
    centroid,
    is_measurable,
    ring_from_geojson,
    ring_from_points,
    validate_ring,
)
from engine.metrics import compute_edge_lengths, perimeter_m
from engine.reference import reference_area_perimeter, relative_deviation
from engine.units import AreaUnit, convert_all, convert_area, parse_unit
from shared.config import settings

load_dotenv()

logger = logging.getLogger("api")

app = FastAPI(title="Parcel Measurement API", version=settings.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _resolve_ring(payload: Dict[str, Any]) -> Tuple[GeoPoint, ...]:
    """
    Normalise the request geometry. A non-empty ``coordinates`` list wins over
    ``geojson``, the same precedence persisted parcel records use.
    """
    coordinates = payload.get("coordinates")
    geojson = payload.get("geojson")
    try:
        if isinstance(coordinates, list) and coordinates:
            ring = ring_from_points(coordinates)
        elif geojson is not None:
            ring = ring_from_geojson(geojson)
        elif coordinates is not None:
            ring = ring_from_points(coordinates)
        else:
            raise ValueError("coordinates or geojson required")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"INVALID_RING: {e}")

    vertex_count = len(canonical_ring(ring))
    if vertex_count > settings.MAX_RING_VERTICES:
        raise HTTPException(
            status_code=422,
            detail=f"TOO_MANY_VERTICES: {vertex_count} > {settings.MAX_RING_VERTICES}",
        )

    try:
        validate_ring(ring)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"OUT_OF_RANGE: {e}")
    return ring


def _resolve_unit(value: Optional[Any]) -> AreaUnit:
    try:
        return parse_unit(value if value is not None else settings.DEFAULT_AREA_UNIT)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"INVALID_UNIT: {e}")


def _measure(ring, unit: AreaUnit) -> Dict[str, Any]:
    area = compute_area(ring)
    quantity = convert_area(area, unit)
    edges = compute_edge_lengths(ring)
    canonical = canonical_ring(ring)

    data = {
        "vertex_count": len(canonical),
        "valid": is_measurable(canonical),
        "area_m2": area.area_square_meters,
        "area": {
            "unit": unit.value,
            "value": quantity.value,
            "label": format_quantity(quantity),
        },
        "conversions": {u.value: q.value for u, q in convert_all(area).items()},
        "perimeter_m": perimeter_m(ring),
        "edges": [
            {
                "from_index": e.from_index,
                "to_index": e.to_index,
                "length_m": e.length_meters,
                "label": format_distance(e.length_meters),
                "midpoint": e.midpoint.as_dict(),
            }
            for e in edges
        ],
        "centroid": centroid(canonical).as_dict() if canonical else None,
        "reference": None,
    }

    if settings.REFERENCE_AREA_ENABLED and data["valid"]:
        ref_area, ref_perimeter = reference_area_perimeter(canonical)
        data["reference"] = {
            "method": "pyproj_geod_wgs84",
            "area_m2": ref_area,
            "perimeter_m": ref_perimeter,
            "relative_deviation": relative_deviation(area.area_square_meters, ref_area),
        }
    return data


@app.get("/health")
def health_check():
    return {"status": "ok", "version": settings.APP_VERSION}


@app.get("/api/v1/units")
def units_endpoint():
    """Conversion table: how many of each unit one square meter is."""
    return {
        "success": True,
        "data": [
            {
                "unit": unit.value,
                "label": AREA_DISPLAY[unit][0],
                "decimals": AREA_DISPLAY[unit][1],
                "per_square_meter": convert_area(1.0, unit).value,
            }
            for unit in AreaUnit
        ],
    }


@app.post("/api/v1/measure")
def measure_endpoint(payload: Dict[str, Any] = Body(...)):
    """
    Area, edge lengths and unit conversions for a traced ring.

    Called on every vertex add/move/delete, so the response carries everything
    the map needs to redraw labels in one round trip.
    """
    start_ms = time.time() * 1000
    ring = _resolve_ring(payload)
    unit = _resolve_unit(payload.get("unit"))

    try:
        data = _measure(ring, unit)
    except Exception as e:
        logger.error(f"Measure Error: {e}")
        raise HTTPException(status_code=500, detail=f"MEASURE_ERROR: {str(e)}")

    end_ms = time.time() * 1000
    return {
        "success": True,
        "data": data,
        "meta": {"processing_time_ms": int(end_ms - start_ms)},
    }


@app.post("/api/v1/parcels/recompute")
def recompute_endpoint(payload: Dict[str, Any] = Body(...)):
    """
    Re-derive the area of a persisted parcel from its stored ring.

    The stored ``areaSqMeters`` is only a cache; the response reports it next
    to the recomputed value and flags it when it drifted.
    """
    start_ms = time.time() * 1000
    ring = _resolve_ring(payload)

    cached = payload.get("areaSqMeters", payload.get("area"))
    if cached is not None and (isinstance(cached, bool) or not isinstance(cached, (int, float))):
        raise HTTPException(status_code=400, detail="INVALID_AREA: cached area must be a number")

    try:
        area_m2 = compute_area(ring).area_square_meters
    except Exception as e:
        logger.error(f"Recompute Error: {e}")
        raise HTTPException(status_code=500, detail=f"MEASURE_ERROR: {str(e)}")

    drift = None if cached is None else abs(area_m2 - cached)
    stale = drift is not None and drift > settings.CACHE_TOLERANCE_M2
    if stale:
        logger.warning(f"Cached parcel area {cached} differs from ring area {area_m2:.2f} by {drift:.2f} m2")

    end_ms = time.time() * 1000
    return {
        "success": True,
        "data": {
            "area_m2": area_m2,
            "cached_area_m2": cached,
            "drift_m2": drift,
            "cache_stale": stale,
            "valid": is_measurable(canonical_ring(ring)),
        },
        "meta": {"processing_time_ms": int(end_ms - start_ms)},
    }
