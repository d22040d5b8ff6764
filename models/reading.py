"""Read-only view shared by every validated sensor kind."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class SensorReading(Protocol):
    """Anything exposing a device id, timestamp, numeric value and unit label.

    ``Temperature``, ``Humidity`` and ``CO2`` all satisfy this protocol, so code
    that only needs these four properties can work over a mixed collection
    without branching on the concrete kind.

    ``unit_label`` is the unit as canonical text (``"Celsius"``, ``"Percent"``,
    ``"ppm"``); the concrete kinds keep ``unit`` for the vocabulary member itself.
    """

    @property
    def device_id(self) -> str: ...

    @property
    def timestamp(self) -> datetime: ...

    @property
    def value(self) -> float: ...

    @property
    def unit_label(self) -> str: ...


def reading_to_dict(reading: SensorReading) -> Dict[str, Any]:
    return {
        "device_id": reading.device_id,
        "timestamp": reading.timestamp,
        "value": reading.value,
        "unit": reading.unit_label,
    }
