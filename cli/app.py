from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient, read_report_file
from cli.config import CLIConfig, load_config
from cli.render import render_station
from models.records import compute_passkey


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and poking the Ecowitt bridge service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Bridge base URL (defaults to API_BASE_URL env or http://localhost:8080).",
    ),
    report_path: Optional[str] = typer.Option(
        None,
        "--report-path",
        help="Path reports are posted to (defaults to ECOWITT_REPORT_PATH env or /data/report).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, report_path=report_path, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (defaults to ECOWITT_REPORT_HOST)."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (defaults to ECOWITT_REPORT_PORT)."),
) -> None:
    """Run the bridge HTTP server."""
    import uvicorn

    from logging_config import configure_logging
    from settings import get_settings

    settings = get_settings()
    configure_logging()
    uvicorn.run(
        "app.main:app",
        host=host or settings.report_host,
        port=port or settings.report_port,
        log_config=None,
        reload=False,
    )


@app.command("passkey")
def passkey_command(
    mac: str = typer.Argument(..., help="Base unit MAC address, as configured."),
) -> None:
    """Print the PASSKEY a base unit with this MAC sends."""
    typer.echo(compute_passkey(mac))


@app.command("send")
def send_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="key=value report capture."),
) -> None:
    """Replay a captured report against the bridge."""
    state = _get_state(ctx)
    fields = read_report_file(file)
    typer.echo(f"Sending {len(fields)} fields to {state.config.base_url}{state.config.report_path} ...")
    payload = state.client.send_report(fields)
    typer.secho(
        f"Report accepted. sensor_count={payload.get('sensor_count')}",
        fg=typer.colors.GREEN,
    )


@app.command("inventory")
def inventory_command(ctx: typer.Context) -> None:
    """Show station metadata and discovered sensors."""
    state = _get_state(ctx)
    render_station(state.client.get_station())
