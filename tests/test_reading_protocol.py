"""The generic reading view over heterogeneous sensor kinds."""

from __future__ import annotations

from datetime import datetime, timezone

from models.reading import SensorReading, reading_to_dict
from models.records import SensorData
from models.sensors import CO2, Humidity, Temperature
from models.units import CO2Unit, HumidityUnit, TemperatureUnit

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _clock() -> datetime:
    return NOW


def _mixed_readings() -> list[SensorReading]:
    return [
        Temperature("temp-001", NOW, 25.0, TemperatureUnit.fahrenheit, clock=_clock),
        Humidity("hum-001", NOW, 55.0, HumidityUnit.percent, clock=_clock),
        CO2("co2-001", NOW, 800.0, CO2Unit.ppm, clock=_clock),
    ]


def test_all_kinds_satisfy_the_protocol() -> None:
    for reading in _mixed_readings():
        assert isinstance(reading, SensorReading)


def test_unit_label_delegates_to_canonical_text() -> None:
    labels = [reading.unit_label for reading in _mixed_readings()]

    assert labels == ["Fahrenheit", "Percent", "ppm"]


def test_projection_without_kind_specific_branching() -> None:
    projected = [reading_to_dict(reading) for reading in _mixed_readings()]

    assert projected[0] == {
        "device_id": "temp-001",
        "timestamp": NOW,
        "value": 25.0,
        "unit": "Fahrenheit",
    }
    assert [item["device_id"] for item in projected] == ["temp-001", "hum-001", "co2-001"]
    assert [item["value"] for item in projected] == [25.0, 55.0, 800.0]


def test_aggregate_record_is_not_a_reading() -> None:
    assert not isinstance(SensorData("device-1", NOW), SensorReading)


def test_unit_label_is_text_while_unit_stays_the_vocabulary_member() -> None:
    temperature = _mixed_readings()[0]

    assert temperature.unit is TemperatureUnit.fahrenheit  # type: ignore[attr-defined]
    assert type(temperature.unit_label) is str
    assert temperature.unit_label == "Fahrenheit"
