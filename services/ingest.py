"""Validation and persistence orchestration for incoming sensor records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Callable, Dict, List, Mapping, Optional

from datastore.json_store import build_default_repository
from datastore.repository import SensorRepository
from models.clock import Clock, utc_now
from models.errors import SensorValidationError
from models.reading import SensorReading
from models.records import SensorData, SensorMeasurement
from models.sensors import CO2, Humidity, Temperature, validate_identity
from models.units import CO2Unit, HumidityUnit, TemperatureUnit
from services.aggregator import AggregationSummary, Aggregator

logger = logging.getLogger(__name__)

_ReadingFactory = Callable[[str, datetime, SensorMeasurement, Optional[Clock]], SensorReading]


def _temperature(
    device_id: str, timestamp: datetime, measurement: SensorMeasurement, clock: Optional[Clock]
) -> SensorReading:
    unit = TemperatureUnit.parse(measurement.unit)
    return Temperature(device_id, timestamp, measurement.value, unit, clock=clock)


def _humidity(
    device_id: str, timestamp: datetime, measurement: SensorMeasurement, clock: Optional[Clock]
) -> SensorReading:
    unit = HumidityUnit.parse(measurement.unit)
    return Humidity(device_id, timestamp, measurement.value, unit, clock=clock)


def _co2(
    device_id: str, timestamp: datetime, measurement: SensorMeasurement, clock: Optional[Clock]
) -> SensorReading:
    unit = CO2Unit.parse(measurement.unit)
    return CO2(device_id, timestamp, measurement.value, unit, clock=clock)


_BUILTIN_SENSORS: Dict[str, _ReadingFactory] = {
    "temperature": _temperature,
    "humidity": _humidity,
    "co2": _co2,
}


class ReadingRejected(SensorValidationError):
    """Validation failure annotated with the slot it came from.

    ``sensor`` is ``None`` when the record envelope itself (device id or
    timestamp) was rejected.
    """

    def __init__(self, sensor: Optional[str], error: SensorValidationError) -> None:
        super().__init__(sensor, error)
        self.sensor = sensor
        self.error = error
        self.code = error.code

    def __str__(self) -> str:
        if self.sensor is None:
            return str(self.error)
        return f"{self.sensor}: {self.error}"


@dataclass
class IngestResult:
    record: SensorData
    readings: List[SensorReading] = field(default_factory=list)


class SensorIngestService:
    """Validates readings through the per-kind value objects and stores the resulting record."""

    def __init__(
        self,
        repository: SensorRepository,
        aggregator: Aggregator,
        clock: Optional[Clock] = None,
    ) -> None:
        self.repository = repository
        self.aggregator = aggregator
        self.clock = clock

    def ingest(
        self,
        device_id: str,
        timestamp: datetime,
        temperature: Optional[SensorMeasurement] = None,
        humidity: Optional[SensorMeasurement] = None,
        co2: Optional[SensorMeasurement] = None,
        additional_sensors: Optional[Mapping[str, SensorMeasurement]] = None,
    ) -> IngestResult:
        """Validate the built-in measurements, then save one record.

        Raises ``ReadingRejected`` for the first invalid slot, in which case
        nothing is saved. ``StorageError`` from the repository propagates unchanged.
        """

        try:
            validate_identity(device_id, timestamp, (self.clock or utc_now)())
        except SensorValidationError as exc:
            logger.warning(
                "Rejecting record", extra={"device_id": device_id, "reason": exc.code}
            )
            raise ReadingRejected(None, exc) from exc

        builtins = {"temperature": temperature, "humidity": humidity, "co2": co2}
        readings: List[SensorReading] = []
        record = SensorData(device_id=device_id, timestamp=timestamp)

        for sensor, measurement in builtins.items():
            if measurement is None:
                continue
            try:
                reading = _BUILTIN_SENSORS[sensor](device_id, timestamp, measurement, self.clock)
            except SensorValidationError as exc:
                logger.warning(
                    "Rejecting reading",
                    extra={"device_id": device_id, "sensor": sensor, "reason": exc.code},
                )
                raise ReadingRejected(sensor, exc) from exc
            readings.append(reading)
            # The stored unit is the caller's text, not the canonical label.
            record = getattr(record, f"with_{sensor}")(reading.value, measurement.unit)

        for name, measurement in (additional_sensors or {}).items():
            record = record.with_additional_sensor(name, measurement.value, measurement.unit)

        self.repository.save(record)
        logger.info(
            "Stored sensor record",
            extra={"device_id": device_id, "reading_count": len(readings)},
        )
        return IngestResult(record=record, readings=readings)

    def history(self, device_id: str) -> List[SensorData]:
        return self.repository.find_by_device_id(device_id)

    def readings_for(self, record: SensorData) -> List[SensorReading]:
        """Rebuild validated readings from a stored record, skipping slots that no longer validate."""

        readings: List[SensorReading] = []
        for sensor, factory in _BUILTIN_SENSORS.items():
            measurement = getattr(record, sensor)
            if measurement is None:
                continue
            try:
                readings.append(
                    factory(record.device_id, record.timestamp, measurement, self.clock)
                )
            except SensorValidationError as exc:
                logger.warning(
                    "Skipping stored reading",
                    extra={"device_id": record.device_id, "sensor": sensor, "reason": exc.code},
                )
        return readings

    def summarize(self, device_id: str) -> AggregationSummary:
        readings: List[SensorReading] = []
        for record in self.history(device_id):
            readings.extend(self.readings_for(record))
        return self.aggregator.aggregate(readings)


@lru_cache
def build_default_ingest_service() -> SensorIngestService:
    """Factory that wires the ingest service with the configured repository."""
    return SensorIngestService(repository=build_default_repository(), aggregator=Aggregator())
