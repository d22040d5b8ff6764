"""Validated, immutable sensor readings.

Each kind is its own frozen dataclass. Construction is the validation boundary:
an instance exists only if its device id is non-empty, its timestamp is not in
the future and its value lies within the kind's inclusive bounds. Checks run in
that order and the first failure is raised.
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from datetime import datetime
from typing import Optional, Protocol

from models.clock import Clock, as_utc, utc_now
from models.errors import EmptyDeviceId, FutureTimestamp, ValueOutOfRange
from models.units import CO2Unit, HumidityUnit, TemperatureUnit


@dataclass(frozen=True, slots=True)
class SensorBounds:
    """Inclusive value range accepted for one sensor kind."""

    kind: str
    minimum: float
    maximum: float

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


TEMPERATURE_BOUNDS = SensorBounds(kind="temperature", minimum=-50.0, maximum=150.0)
HUMIDITY_BOUNDS = SensorBounds(kind="humidity", minimum=0.0, maximum=100.0)
CO2_BOUNDS = SensorBounds(kind="co2", minimum=0.0, maximum=50_000.0)


def validate_identity(device_id: str, timestamp: datetime, now: datetime) -> datetime:
    """Check the device id and timestamp; return the timestamp normalised to UTC."""

    if not device_id:
        raise EmptyDeviceId()
    normalized = as_utc(timestamp)
    if normalized > as_utc(now):
        raise FutureTimestamp()
    return normalized


def validate_range(value: float, bounds: SensorBounds) -> float:
    candidate = float(value)
    # NaN compares false against both bounds.
    if not bounds.contains(candidate):
        raise ValueOutOfRange(value=candidate, min=bounds.minimum, max=bounds.maximum)
    return candidate


def validate_reading(
    bounds: SensorBounds,
    device_id: str,
    timestamp: datetime,
    value: float,
    clock: Optional[Clock] = None,
) -> tuple[datetime, float]:
    """Run the shared checks for one reading and return the normalised timestamp and value."""

    now = (clock or utc_now)()
    normalized = validate_identity(device_id, timestamp, now)
    return normalized, validate_range(value, bounds)


class _ReadingFields(Protocol):
    device_id: str
    timestamp: datetime
    value: float


def _finalize(instance: _ReadingFields, bounds: SensorBounds, clock: Optional[Clock]) -> None:
    timestamp, value = validate_reading(
        bounds, instance.device_id, instance.timestamp, instance.value, clock
    )
    object.__setattr__(instance, "timestamp", timestamp)
    object.__setattr__(instance, "value", value)


@dataclass(frozen=True, slots=True)
class Temperature:
    device_id: str
    timestamp: datetime
    value: float
    unit: TemperatureUnit
    clock: InitVar[Optional[Clock]] = field(default=None, kw_only=True)

    bounds = TEMPERATURE_BOUNDS

    def __post_init__(self, clock: Optional[Clock]) -> None:
        _finalize(self, self.bounds, clock)

    @property
    def kind(self) -> str:
        return self.bounds.kind

    @property
    def unit_label(self) -> str:
        return self.unit.as_str()


@dataclass(frozen=True, slots=True)
class Humidity:
    device_id: str
    timestamp: datetime
    value: float
    unit: HumidityUnit = HumidityUnit.percent
    clock: InitVar[Optional[Clock]] = field(default=None, kw_only=True)

    bounds = HUMIDITY_BOUNDS

    def __post_init__(self, clock: Optional[Clock]) -> None:
        _finalize(self, self.bounds, clock)

    @property
    def kind(self) -> str:
        return self.bounds.kind

    @property
    def unit_label(self) -> str:
        return self.unit.as_str()


@dataclass(frozen=True, slots=True)
class CO2:
    device_id: str
    timestamp: datetime
    value: float
    unit: CO2Unit = CO2Unit.ppm
    clock: InitVar[Optional[Clock]] = field(default=None, kw_only=True)

    bounds = CO2_BOUNDS

    def __post_init__(self, clock: Optional[Clock]) -> None:
        _finalize(self, self.bounds, clock)

    @property
    def kind(self) -> str:
        return self.bounds.kind

    @property
    def unit_label(self) -> str:
        return self.unit.as_str()
