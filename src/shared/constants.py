"""
Shared constants for the parcel measurement engine.

Ellipsoid parameters, unit conversion factors, display conventions and API
limits live here so every module reads the same immutable values.
"""

# ─── WGS84 reference ellipsoid ───────────────────────────
WGS84_A = 6378137.0                # semi-major axis (m)
WGS84_E2 = 0.00669437999014        # first eccentricity squared

# ─── Spherical earth (edge lengths) ──────────────────────
MEAN_EARTH_RADIUS_M = 6_371_000    # haversine radius

# ─── Valid coordinate ranges ─────────────────────────────
LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)

# ─── Area units ──────────────────────────────────────────
# square meters per one unit; SQUARE_FOOT is stored as the inverse of 10.7639
SQ_M_PER_HECTARE = 10_000.0
SQ_FT_PER_SQ_M = 10.7639
SQ_M_PER_ACRE = 4046.86
SQ_M_PER_GROUND = 222.97           # Tamil Nadu customary
SQ_M_PER_CENT = 40.47              # Kerala customary

# ─── Display ─────────────────────────────────────────────
KM_LABEL_THRESHOLD_M = 1000.0      # distances at or above render in km
KM_DECIMALS = 2
M_DECIMALS = 1

# ─── API limits ──────────────────────────────────────────
MAX_RING_VERTICES = 500
MIN_RING_VERTICES = 3

# ─── Server ──────────────────────────────────────────────
DEV_PORT = 8000
