"""
Label formatting for measured distances and areas.
"""

from typing import Dict, Union

from shared.constants import KM_DECIMALS, KM_LABEL_THRESHOLD_M, M_DECIMALS
from .area import AreaMeasurement
from .units import AreaUnit, UnitQuantity, convert_area, parse_unit

# (suffix, decimals, thousands grouping)
AREA_DISPLAY: Dict[AreaUnit, tuple] = {
    AreaUnit.SQUARE_METER: ("m²", 0, True),
    AreaUnit.HECTARE: ("HA", 4, False),
    AreaUnit.SQUARE_FOOT: ("FT²", 0, True),
    AreaUnit.ACRE: ("Acre", 3, False),
    AreaUnit.GROUND: ("Ground", 2, False),
    AreaUnit.CENT: ("Cent", 1, False),
}


def format_distance(meters: float) -> str:
    """
    Edge label: ``"1.25 km"`` from 1000 m upward, ``"111.2 m"`` below.
    """
    if meters >= KM_LABEL_THRESHOLD_M:
        return f"{meters / 1000:.{KM_DECIMALS}f} km"
    return f"{meters:.{M_DECIMALS}f} m"


def format_quantity(quantity: UnitQuantity) -> str:
    suffix, decimals, grouped = AREA_DISPLAY[quantity.unit]
    if grouped:
        return f"{quantity.value:,.{decimals}f} {suffix}"
    return f"{quantity.value:.{decimals}f} {suffix}"


def format_area(area: Union[AreaMeasurement, float], unit: Union[str, AreaUnit] = AreaUnit.HECTARE) -> str:
    """Area label in ``unit``, e.g. ``"2.0234 HA"`` or ``"217,800 FT²"``."""
    return format_quantity(convert_area(area, parse_unit(unit)))
