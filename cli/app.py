from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_record, render_records, render_summary


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the sensor store service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _parse_timestamp(value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid ISO-8601 timestamp: {value}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_sensor(spec: str) -> tuple[str, Dict[str, Any]]:
    """Parse ``name=value:unit`` into a named measurement."""
    name, sep, rest = spec.partition("=")
    raw_value, sep_unit, unit = rest.partition(":")
    if not name or not sep or not sep_unit or not unit:
        raise typer.BadParameter(f"Expected name=value:unit, got {spec!r}.")
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise typer.BadParameter(f"Sensor {name!r} has a non-numeric value {raw_value!r}.") from exc
    return name, {"value": value, "unit": unit}


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://127.0.0.1:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check that the service is up."""
    state = _get_state(ctx)
    if state.client.health():
        typer.secho(f"{state.config.base_url} is healthy.", fg=typer.colors.GREEN)
        return
    typer.secho(f"{state.config.base_url} is not responding.", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("submit")
def submit_command(
    ctx: typer.Context,
    device_id: str = typer.Argument(..., help="Identifier of the reporting device."),
    temperature: Optional[float] = typer.Option(None, "--temperature", "-t"),
    temperature_unit: str = typer.Option("celsius", "--temperature-unit"),
    humidity: Optional[float] = typer.Option(None, "--humidity", "-u"),
    humidity_unit: str = typer.Option("percent", "--humidity-unit"),
    co2: Optional[float] = typer.Option(None, "--co2", "-c"),
    co2_unit: str = typer.Option("ppm", "--co2-unit"),
    sensor: Optional[List[str]] = typer.Option(
        None,
        "--sensor",
        "-s",
        help="Additional sensor as name=value:unit; may be repeated.",
    ),
    timestamp: Optional[str] = typer.Option(
        None,
        "--timestamp",
        help=(
            "ISO-8601 instant of the readings. Defaults to this machine's clock; "
            "the server rejects timestamps ahead of its own clock, so pass one "
            "explicitly if the clocks may drift."
        ),
    ),
) -> None:
    """Submit one record of readings for a device."""
    state = _get_state(ctx)
    payload: Dict[str, Any] = {
        "device_id": device_id,
        "timestamp": _parse_timestamp(timestamp).isoformat(),
    }
    if temperature is not None:
        payload["temperature"] = {"value": temperature, "unit": temperature_unit}
    if humidity is not None:
        payload["humidity"] = {"value": humidity, "unit": humidity_unit}
    if co2 is not None:
        payload["co2"] = {"value": co2, "unit": co2_unit}
    if sensor:
        payload["additional_sensors"] = dict(_parse_sensor(spec) for spec in sensor)

    response = state.client.submit(payload)
    typer.secho("Record stored.", fg=typer.colors.GREEN)
    render_record(response.get("record") or {})


@app.command("readings")
def readings_command(
    ctx: typer.Context,
    device_id: str = typer.Argument(..., help="Identifier of the device to look up."),
) -> None:
    """List stored records for a device."""
    state = _get_state(ctx)
    render_records(device_id, state.client.readings(device_id))


@app.command("summary")
def summary_command(
    ctx: typer.Context,
    device_id: str = typer.Argument(..., help="Identifier of the device to summarize."),
) -> None:
    """Show aggregate statistics for a device."""
    state = _get_state(ctx)
    render_summary(state.client.summary(device_id))
