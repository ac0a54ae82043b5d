from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _sensor_label(sensor: Dict[str, Any]) -> str:
    channel = sensor.get("channel")
    if channel:
        return f"{sensor.get('type')} channel {channel}"
    return str(sensor.get("type"))


def render_station(payload: Dict[str, Any]) -> None:
    echo_heading("Station")
    echo_key_values(
        [
            ("serial_number", payload.get("serial_number")),
            ("model", payload.get("model")),
            ("hardware_revision", payload.get("hardware_revision")),
            ("firmware_revision", payload.get("firmware_revision")),
            ("frequency", payload.get("frequency")),
            ("state", payload.get("state")),
            ("last_report_at", payload.get("last_report_at")),
        ]
    )

    sensors = payload.get("sensors") or []
    typer.echo()
    echo_heading("Sensors")
    if not sensors:
        typer.echo("No sensors discovered yet.")
        return
    for sensor in sensors:
        typer.echo(f"  - {_sensor_label(sensor)} [{sensor.get('sensor_id')}]")
        for key, value in (sensor.get("state") or {}).items():
            if value is not None:
                typer.echo(f"      {key}: {value}")
