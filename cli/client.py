from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import httpx
import typer

from cli.config import CLIConfig


def read_report_file(path: Path) -> Dict[str, str]:
    """Parse a ``key=value`` per line report capture; ``#`` starts a comment."""
    fields: Dict[str, str] = {}
    for line_number, line in enumerate(path.read_text().splitlines(), start=1):
        candidate = line.strip()
        if not candidate or candidate.startswith("#"):
            continue
        key, sep, value = candidate.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Line {line_number} of {path} is not key=value.")
        fields[key.strip()] = value.strip()
    return fields


class ApiClient:
    """Minimal HTTP client for the bridge service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def send_report(self, fields: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = self._client.post(self._config.report_path, data=fields)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def get_station(self) -> Dict[str, Any]:
        try:
            response = self._client.get("/station")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
