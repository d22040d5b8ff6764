"""Construction-time validation of the per-kind sensor value objects."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from models.errors import EmptyDeviceId, FutureTimestamp, ValueOutOfRange
from models.sensors import CO2, Humidity, Temperature
from models.units import CO2Unit, HumidityUnit, TemperatureUnit

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


KINDS = [
    pytest.param(Temperature, TemperatureUnit.celsius, -50.0, 150.0, id="temperature"),
    pytest.param(Humidity, HumidityUnit.percent, 0.0, 100.0, id="humidity"),
    pytest.param(CO2, CO2Unit.ppm, 0.0, 50000.0, id="co2"),
]


@pytest.mark.parametrize(("kind", "unit", "minimum", "maximum"), KINDS)
def test_inclusive_bounds_and_midpoint_are_accepted(kind, unit, minimum, maximum) -> None:
    for value in (minimum, (minimum + maximum) / 2, maximum):
        sensor = kind("device-1", NOW, value, unit, clock=fixed_clock)

        assert sensor.device_id == "device-1"
        assert sensor.timestamp == NOW
        assert sensor.value == value
        assert sensor.unit is unit


@pytest.mark.parametrize(("kind", "unit", "minimum", "maximum"), KINDS)
def test_values_outside_bounds_are_rejected(kind, unit, minimum, maximum) -> None:
    for value in (minimum - 0.1, maximum + 0.1):
        with pytest.raises(ValueOutOfRange) as excinfo:
            kind("device-1", NOW, value, unit, clock=fixed_clock)

        assert excinfo.value.value == value
        assert excinfo.value.min == minimum
        assert excinfo.value.max == maximum


@pytest.mark.parametrize(("kind", "unit", "minimum", "maximum"), KINDS)
def test_empty_device_id_is_rejected(kind, unit, minimum, maximum) -> None:
    with pytest.raises(EmptyDeviceId):
        kind("", NOW, minimum, unit, clock=fixed_clock)


@pytest.mark.parametrize(("kind", "unit", "minimum", "maximum"), KINDS)
def test_future_timestamp_is_rejected(kind, unit, minimum, maximum) -> None:
    with pytest.raises(FutureTimestamp):
        kind("device-1", NOW + timedelta(hours=1), minimum, unit, clock=fixed_clock)


def test_timestamp_equal_to_now_is_accepted() -> None:
    sensor = Temperature("device-1", NOW, 20.0, TemperatureUnit.celsius, clock=fixed_clock)

    assert sensor.timestamp == NOW


def test_empty_device_id_wins_over_other_failures() -> None:
    with pytest.raises(EmptyDeviceId):
        Temperature(
            "", NOW + timedelta(hours=1), 999.0, TemperatureUnit.celsius, clock=fixed_clock
        )


def test_future_timestamp_wins_over_range_failure() -> None:
    with pytest.raises(FutureTimestamp):
        Humidity("device-1", NOW + timedelta(seconds=1), 120.0, clock=fixed_clock)


def test_default_clock_uses_wall_time() -> None:
    now = datetime.now(timezone.utc)

    sensor = Temperature("device-1", now, 25.0, TemperatureUnit.celsius)
    assert sensor.value == 25.0

    with pytest.raises(FutureTimestamp):
        Temperature("device-1", now + timedelta(hours=1), 25.0, TemperatureUnit.celsius)


def test_below_minimum_scenario() -> None:
    with pytest.raises(ValueOutOfRange) as excinfo:
        Temperature("device-1", NOW, -60.0, TemperatureUnit.celsius, clock=fixed_clock)

    assert excinfo.value == ValueOutOfRange(value=-60.0, min=-50.0, max=150.0)
    assert str(excinfo.value) == "value -60.0 is out of range [-50.0, 150.0]"


def test_nan_is_out_of_range() -> None:
    with pytest.raises(ValueOutOfRange):
        CO2("device-1", NOW, float("nan"), clock=fixed_clock)


def test_naive_timestamp_is_treated_as_utc() -> None:
    naive = datetime(2024, 6, 1, 11, 0)

    sensor = CO2("device-1", naive, 400.0, clock=fixed_clock)

    assert sensor.timestamp == naive.replace(tzinfo=timezone.utc)
    assert sensor.timestamp.tzinfo is timezone.utc


def test_value_objects_are_immutable() -> None:
    sensor = Humidity("device-1", NOW, 45.0, clock=fixed_clock)

    with pytest.raises(dataclasses.FrozenInstanceError):
        sensor.value = 50.0  # type: ignore[misc]


def test_equality_is_structural() -> None:
    first = CO2("device-1", NOW, 410.0, CO2Unit.ppm, clock=fixed_clock)
    second = CO2("device-1", NOW, 410.0, CO2Unit.ppm, clock=fixed_clock)
    other = CO2("device-2", NOW, 410.0, CO2Unit.ppm, clock=fixed_clock)

    assert first == second
    assert hash(first) == hash(second)
    assert first != other


def test_different_kinds_with_same_fields_are_not_equal() -> None:
    humidity = Humidity("device-1", NOW, 40.0, clock=fixed_clock)
    co2 = CO2("device-1", NOW, 40.0, clock=fixed_clock)

    assert humidity != co2


def test_replace_revalidates() -> None:
    sensor = Temperature("device-1", NOW, 25.0, TemperatureUnit.celsius, clock=fixed_clock)

    with pytest.raises(ValueOutOfRange):
        dataclasses.replace(sensor, value=200.0)
