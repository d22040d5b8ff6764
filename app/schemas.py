"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from datastore.documents import MeasurementDocument, SensorDataDocument
from models.reading import SensorReading, reading_to_dict
from services.aggregator import AggregationSummary


class MeasurementPayload(MeasurementDocument):
    """A raw value with its free-text unit label."""

    value: float = Field(..., allow_inf_nan=False)


class SensorDataPayload(BaseModel):
    """Incoming multi-metric record for one device at one instant."""

    device_id: str = Field(..., description="Identifier of the reporting device.")
    timestamp: datetime = Field(..., description="Instant the readings were taken (UTC).")
    temperature: Optional[MeasurementPayload] = None
    humidity: Optional[MeasurementPayload] = None
    co2: Optional[MeasurementPayload] = None
    additional_sensors: Dict[str, MeasurementPayload] = Field(default_factory=dict)


class ReadingView(BaseModel):
    """Validated reading, projected through the generic reading capability."""

    device_id: str
    timestamp: datetime
    value: float
    unit: str

    @classmethod
    def from_reading(cls, reading: SensorReading) -> "ReadingView":
        return cls(**reading_to_dict(reading))


class IngestResponse(BaseModel):
    record: SensorDataDocument
    readings: List[ReadingView] = Field(default_factory=list)


class UnitSummary(BaseModel):
    count: int = Field(..., ge=0)
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    mean_value: Optional[float] = None


class DeviceSummary(BaseModel):
    """Aggregate statistics over a device's stored, still-valid readings."""

    device_id: str
    reading_count: int = Field(..., ge=0)
    per_unit: Dict[str, UnitSummary] = Field(default_factory=dict)

    @classmethod
    def from_summary(cls, device_id: str, summary: AggregationSummary) -> "DeviceSummary":
        return cls(
            device_id=device_id,
            reading_count=summary.reading_count,
            per_unit={
                unit: UnitSummary(
                    count=stats.count,
                    min_value=stats.min_value,
                    max_value=stats.max_value,
                    mean_value=stats.mean_value,
                )
                for unit, stats in summary.per_unit.items()
            },
        )
