"""HTTP route definitions for the service."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.schemas import ReportAccepted, StationSummary
from services.errors import AuthenticationError, MalformedPayloadError
from services.station import Station, build_default_station

router = APIRouter()


def get_station() -> Station:
    return build_default_station()


async def _read_body(request: Request) -> Any:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedPayloadError("Report body is not valid JSON.") from exc
    form = await request.form()
    return {key: value for key, value in form.items()}


async def receive_report(
    request: Request,
    station: Station = Depends(get_station),
) -> ReportAccepted:
    """Accept a report pushed by the base unit.

    Mounted at the configured report path by ``create_app``.
    """
    remote_addr = request.client.host if request.client else None
    try:
        body = await _read_body(request)
        station.handle_report(body, remote_addr=remote_addr)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
    except MalformedPayloadError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return ReportAccepted(sensor_count=len(station.inventory))


@router.get(
    "/station",
    response_model=StationSummary,
    summary="Station metadata and the live sensor inventory.",
)
async def get_station_summary(
    station: Station = Depends(get_station),
) -> StationSummary:
    return station.snapshot()


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /station for sensor inventory."}
