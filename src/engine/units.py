"""
Display-time area unit conversion.

Square meters is the only canonical unit; every other unit is a pure scalar
conversion applied when a value is shown. Nothing here rounds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from shared.constants import (
    SQ_FT_PER_SQ_M,
    SQ_M_PER_ACRE,
    SQ_M_PER_CENT,
    SQ_M_PER_GROUND,
    SQ_M_PER_HECTARE,
)
from .area import AreaMeasurement


class AreaUnit(str, Enum):
    SQUARE_METER = "SQUARE_METER"
    HECTARE = "HECTARE"
    SQUARE_FOOT = "SQUARE_FOOT"
    ACRE = "ACRE"
    GROUND = "GROUND"   # Tamil Nadu
    CENT = "CENT"       # Kerala


@dataclass(frozen=True)
class UnitQuantity:
    value: float
    unit: AreaUnit


# area_in_unit = area_m2 / divisor
_DIVISORS: Dict[AreaUnit, float] = {
    AreaUnit.SQUARE_METER: 1.0,
    AreaUnit.HECTARE: SQ_M_PER_HECTARE,
    AreaUnit.ACRE: SQ_M_PER_ACRE,
    AreaUnit.GROUND: SQ_M_PER_GROUND,
    AreaUnit.CENT: SQ_M_PER_CENT,
}
# area_in_unit = area_m2 * multiplier
_MULTIPLIERS: Dict[AreaUnit, float] = {
    AreaUnit.SQUARE_FOOT: SQ_FT_PER_SQ_M,
}

# Short keys used by the map front end
_ALIASES = {
    "m2": AreaUnit.SQUARE_METER,
    "sqm": AreaUnit.SQUARE_METER,
    "ha": AreaUnit.HECTARE,
    "sqft": AreaUnit.SQUARE_FOOT,
    "ft2": AreaUnit.SQUARE_FOOT,
    "acre": AreaUnit.ACRE,
    "ground": AreaUnit.GROUND,
    "cent": AreaUnit.CENT,
}


def parse_unit(value: Union[str, AreaUnit]) -> AreaUnit:
    """Resolve an enum name (``"HECTARE"``) or front-end key (``"ha"``)."""
    if isinstance(value, AreaUnit):
        return value
    if not isinstance(value, str):
        raise ValueError(f"unknown area unit: {value!r}")
    key = value.strip()
    if key.upper() in AreaUnit.__members__:
        return AreaUnit[key.upper()]
    try:
        return _ALIASES[key.lower()]
    except KeyError:
        raise ValueError(f"unknown area unit: {value!r}") from None


def _square_meters(area: Union[AreaMeasurement, float]) -> float:
    if isinstance(area, AreaMeasurement):
        return area.area_square_meters
    return float(area)


def convert_area(area: Union[AreaMeasurement, float], unit: Union[str, AreaUnit]) -> UnitQuantity:
    """Express a square-meter area in ``unit``."""
    unit = parse_unit(unit)
    sq_m = _square_meters(area)
    if unit in _MULTIPLIERS:
        return UnitQuantity(sq_m * _MULTIPLIERS[unit], unit)
    return UnitQuantity(sq_m / _DIVISORS[unit], unit)


def area_in_square_meters(quantity: UnitQuantity) -> float:
    """Inverse of :func:`convert_area`."""
    if quantity.unit in _MULTIPLIERS:
        return quantity.value / _MULTIPLIERS[quantity.unit]
    return quantity.value * _DIVISORS[quantity.unit]


def convert_all(area: Union[AreaMeasurement, float]) -> Dict[AreaUnit, UnitQuantity]:
    return {unit: convert_area(area, unit) for unit in AreaUnit}
