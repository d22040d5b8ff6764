from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _measurement(payload: Dict[str, Any] | None) -> str:
    if not payload:
        return "-"
    return f"{payload.get('value')} {payload.get('unit')}"


def render_record(record: Dict[str, Any]) -> None:
    echo_heading(f"{record.get('device_id')} @ {record.get('timestamp')}")
    echo_key_values(
        [
            ("temperature", _measurement(record.get("temperature"))),
            ("humidity", _measurement(record.get("humidity"))),
            ("co2", _measurement(record.get("co2"))),
        ]
    )
    extra = record.get("additional_sensors") or {}
    for name, measurement in sorted(extra.items()):
        typer.echo(f"  - {name}: {_measurement(measurement)}")


def render_records(device_id: str, records: List[Dict[str, Any]]) -> None:
    if not records:
        typer.echo(f"No readings stored for {device_id}.")
        return
    for index, record in enumerate(records):
        if index:
            typer.echo()
        render_record(record)


def render_summary(payload: Dict[str, Any]) -> None:
    echo_heading("Summary")
    echo_key_values(
        [
            ("device_id", payload.get("device_id")),
            ("reading_count", payload.get("reading_count")),
        ]
    )
    per_unit = payload.get("per_unit") or {}
    if not per_unit:
        typer.echo("No valid readings.")
        return
    typer.echo("per_unit:")
    for unit, stats in per_unit.items():
        typer.echo(
            f"  - {unit}: count={stats.get('count')} min={stats.get('min_value')} "
            f"max={stats.get('max_value')} mean={stats.get('mean_value')}"
        )
