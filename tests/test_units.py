"""
Unit tests for area unit conversion and label formatting.
"""

import pytest

from engine.area import AreaMeasurement
from engine.formatting import format_area, format_distance, format_quantity
from engine.units import (
    AreaUnit,
    UnitQuantity,
    area_in_square_meters,
    convert_all,
    convert_area,
    parse_unit,
)

AREA = AreaMeasurement(20234.3)


def test_conversion_factors():
    assert convert_area(AREA, AreaUnit.SQUARE_METER).value == 20234.3
    assert convert_area(AREA, AreaUnit.HECTARE).value == pytest.approx(2.02343)
    assert convert_area(AREA, AreaUnit.SQUARE_FOOT).value == pytest.approx(20234.3 * 10.7639)
    assert convert_area(AREA, AreaUnit.ACRE).value == pytest.approx(5.0, abs=5e-3)
    assert convert_area(AREA, AreaUnit.GROUND).value == pytest.approx(20234.3 / 222.97)
    assert convert_area(AREA, AreaUnit.CENT).value == pytest.approx(20234.3 / 40.47)


def test_conversion_does_not_round():
    assert convert_area(1.0, AreaUnit.HECTARE).value == 1e-4
    assert convert_area(12345.678, AreaUnit.SQUARE_METER).value == 12345.678


@pytest.mark.parametrize("unit", list(AreaUnit))
def test_unit_round_trip(unit):
    quantity = convert_area(AREA, unit)
    assert quantity.unit is unit
    assert area_in_square_meters(quantity) == pytest.approx(AREA.area_square_meters, rel=1e-12)


def test_hectare_times_ten_thousand():
    assert convert_area(AREA, "HECTARE").value * 10000 == pytest.approx(AREA.area_square_meters)


def test_convert_all_covers_every_unit():
    result = convert_all(AREA)
    assert set(result) == set(AreaUnit)


def test_parse_unit_aliases():
    assert parse_unit("ha") is AreaUnit.HECTARE
    assert parse_unit("HECTARE") is AreaUnit.HECTARE
    assert parse_unit("hectare") is AreaUnit.HECTARE
    assert parse_unit("m2") is AreaUnit.SQUARE_METER
    assert parse_unit("sqft") is AreaUnit.SQUARE_FOOT
    assert parse_unit(" Ground ") is AreaUnit.GROUND
    assert parse_unit(AreaUnit.CENT) is AreaUnit.CENT


@pytest.mark.parametrize("bad", ["furlong", "", None, 3])
def test_parse_unit_rejects_unknown(bad):
    with pytest.raises(ValueError):
        parse_unit(bad)


# -----------------------------------------------------------------------------
# Display formatting
# -----------------------------------------------------------------------------
def test_area_display_conventions():
    assert format_area(AREA, AreaUnit.HECTARE) == "2.0234 HA"
    assert format_area(AREA, AreaUnit.ACRE) == "5.000 Acre"
    assert format_area(222.97, AreaUnit.GROUND) == "1.00 Ground"
    assert format_area(404.7, AreaUnit.CENT) == "10.0 Cent"
    assert format_area(1000.0, "sqft") == "10,764 FT²"
    assert format_area(12003.4, "m2") == "12,003 m²"


def test_format_area_defaults_to_hectare():
    assert format_area(AREA) == "2.0234 HA"


def test_format_quantity():
    assert format_quantity(UnitQuantity(1.23456, AreaUnit.HECTARE)) == "1.2346 HA"


@pytest.mark.parametrize("meters, label", [
    (0.0, "0.0 m"),
    (111.19, "111.2 m"),
    (999.94, "999.9 m"),
    # rounds up to 1000.0 but stays in meters below the km threshold
    (999.96, "1000.0 m"),
    (1000.0, "1.00 km"),
    (1250.0, "1.25 km"),
    (12346.0, "12.35 km"),
])
def test_format_distance(meters, label):
    assert format_distance(meters) == label
