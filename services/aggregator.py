"""Aggregation logic for validated sensor readings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

from models.reading import SensorReading


@dataclass
class UnitStatistics:
    count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float | None = None


@dataclass
class AggregationSummary:
    """Computed statistics for a batch of readings, grouped by unit label."""

    reading_count: int = 0
    per_unit: Dict[str, UnitStatistics] = field(default_factory=dict)
    per_device_count: Dict[str, int] = field(default_factory=dict)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def aggregate(self, readings: Iterable[SensorReading]) -> AggregationSummary:
        summary = AggregationSummary()
        totals: Dict[str, float] = {}

        for reading in readings:
            summary.reading_count += 1
            value = reading.value
            stats = summary.per_unit.setdefault(reading.unit_label, UnitStatistics())
            stats.count += 1
            totals[reading.unit_label] = totals.get(reading.unit_label, 0.0) + value

            if stats.min_value is None or value < stats.min_value:
                stats.min_value = value
            if stats.max_value is None or value > stats.max_value:
                stats.max_value = value

            summary.per_device_count[reading.device_id] = (
                summary.per_device_count.get(reading.device_id, 0) + 1
            )

        for unit, stats in summary.per_unit.items():
            stats.mean_value = totals[unit] / stats.count

        return summary
