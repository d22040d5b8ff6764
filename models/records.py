"""Multi-metric record shape used for persistence."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterator, Optional


@dataclass(frozen=True, slots=True)
class SensorMeasurement:
    """A raw value and its unit label, stored exactly as supplied."""

    value: float
    unit: str


@dataclass(slots=True)
class SensorData:
    """One device's readings at one point in time.

    No validation happens here; values and units are stored verbatim. The
    ``with_*`` helpers return a new record with a single slot replaced and leave
    the original untouched.
    """

    device_id: str
    timestamp: datetime
    temperature: Optional[SensorMeasurement] = None
    humidity: Optional[SensorMeasurement] = None
    co2: Optional[SensorMeasurement] = None
    additional_sensors: Dict[str, SensorMeasurement] = field(default_factory=dict)

    def _replace(self, **changes: Any) -> "SensorData":
        changes.setdefault("additional_sensors", dict(self.additional_sensors))
        return replace(self, **changes)

    def with_temperature(self, value: float, unit: str) -> "SensorData":
        return self._replace(temperature=SensorMeasurement(value=value, unit=unit))

    def with_humidity(self, value: float, unit: str) -> "SensorData":
        return self._replace(humidity=SensorMeasurement(value=value, unit=unit))

    def with_co2(self, value: float, unit: str) -> "SensorData":
        return self._replace(co2=SensorMeasurement(value=value, unit=unit))

    def with_additional_sensor(self, name: str, value: float, unit: str) -> "SensorData":
        sensors = dict(self.additional_sensors)
        sensors[name] = SensorMeasurement(value=value, unit=unit)
        return self._replace(additional_sensors=sensors)

    def measurements(self) -> Iterator[tuple[str, SensorMeasurement]]:
        """Yield ``(slot, measurement)`` for the populated built-in slots, then extra sensors."""

        for slot in ("temperature", "humidity", "co2"):
            measurement = getattr(self, slot)
            if measurement is not None:
                yield slot, measurement
        yield from self.additional_sensors.items()
