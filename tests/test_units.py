"""Unit vocabulary parsing tests."""

from __future__ import annotations

import pytest

from models.errors import InvalidUnit
from models.units import CO2Unit, HumidityUnit, TemperatureUnit


@pytest.mark.parametrize("text", ["CELSIUS", "celsius", "Celsius", "C", "c"])
def test_temperature_celsius_aliases(text: str) -> None:
    assert TemperatureUnit.parse(text) is TemperatureUnit.celsius


@pytest.mark.parametrize("text", ["FAHRENHEIT", "fahrenheit", "F", "f"])
def test_temperature_fahrenheit_aliases(text: str) -> None:
    assert TemperatureUnit.parse(text) is TemperatureUnit.fahrenheit


@pytest.mark.parametrize("text", ["%", "percent", "PERCENT", "Percent"])
def test_humidity_aliases(text: str) -> None:
    assert HumidityUnit.parse(text) is HumidityUnit.percent


@pytest.mark.parametrize("text", ["ppm", "PPM", "Ppm"])
def test_co2_aliases(text: str) -> None:
    assert CO2Unit.parse(text) is CO2Unit.ppm


@pytest.mark.parametrize(
    ("unit_type", "text"),
    [
        (TemperatureUnit, "kelvin"),
        (TemperatureUnit, " c"),
        (HumidityUnit, "pct"),
        (CO2Unit, "ppb"),
        (CO2Unit, ""),
    ],
)
def test_unrecognized_text_raises_invalid_unit(unit_type, text: str) -> None:
    with pytest.raises(InvalidUnit) as excinfo:
        unit_type.parse(text)

    assert excinfo.value.raw == text
    assert str(excinfo.value) == f"invalid unit: {text}"


def test_invalid_unit_keeps_original_casing() -> None:
    with pytest.raises(InvalidUnit) as excinfo:
        TemperatureUnit.parse("KELVIN")

    assert excinfo.value.raw == "KELVIN"


def test_canonical_labels() -> None:
    assert TemperatureUnit.celsius.as_str() == "Celsius"
    assert TemperatureUnit.fahrenheit.as_str() == "Fahrenheit"
    assert HumidityUnit.percent.as_str() == "Percent"
    assert CO2Unit.ppm.as_str() == "ppm"
