"""Serialized document shape for stored sensor records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from models.records import SensorData, SensorMeasurement


class MeasurementDocument(BaseModel):
    value: float
    unit: str

    @classmethod
    def from_measurement(
        cls, measurement: Optional[SensorMeasurement]
    ) -> Optional["MeasurementDocument"]:
        if measurement is None:
            return None
        return cls(value=measurement.value, unit=measurement.unit)

    def to_measurement(self) -> SensorMeasurement:
        return SensorMeasurement(value=self.value, unit=self.unit)


class SensorDataDocument(BaseModel):
    """Document stored per record; optional sections are omitted when empty."""

    device_id: str
    timestamp: datetime
    temperature: Optional[MeasurementDocument] = None
    humidity: Optional[MeasurementDocument] = None
    co2: Optional[MeasurementDocument] = None
    additional_sensors: Dict[str, MeasurementDocument] = Field(default_factory=dict)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @classmethod
    def from_record(cls, record: SensorData) -> "SensorDataDocument":
        return cls(
            device_id=record.device_id,
            timestamp=record.timestamp,
            temperature=MeasurementDocument.from_measurement(record.temperature),
            humidity=MeasurementDocument.from_measurement(record.humidity),
            co2=MeasurementDocument.from_measurement(record.co2),
            additional_sensors={
                name: MeasurementDocument(value=m.value, unit=m.unit)
                for name, m in record.additional_sensors.items()
            },
        )

    def to_record(self) -> SensorData:
        return SensorData(
            device_id=self.device_id,
            timestamp=self.timestamp,
            temperature=self.temperature.to_measurement() if self.temperature else None,
            humidity=self.humidity.to_measurement() if self.humidity else None,
            co2=self.co2.to_measurement() if self.co2 else None,
            additional_sensors={
                name: doc.to_measurement() for name, doc in self.additional_sensors.items()
            },
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", exclude_none=True)
        if not payload.get("additional_sensors"):
            payload.pop("additional_sensors", None)
        return payload
