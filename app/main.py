from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, status

from app.api import receive_report, router
from app.schemas import ReportAccepted
from logging_config import configure_logging
from services.station import build_default_station
from settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    station = build_default_station()
    station.start()
    try:
        yield
    finally:
        build_default_station.cache_clear()


def create_app(report_path: Optional[str] = None) -> FastAPI:
    configure_logging()
    path = report_path or get_settings().report_path
    app = FastAPI(
        title="Ecowitt Bridge",
        description="Receives base unit reports and tracks the sensors attached to it.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_api_route(
        path,
        receive_report,
        methods=["POST"],
        status_code=status.HTTP_200_OK,
        response_model=ReportAccepted,
        summary="Receive a report pushed by the base unit.",
    )
    app.include_router(router)
    return app


app = create_app()
