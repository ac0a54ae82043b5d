"""Pydantic schemas for the HTTP API layer and the accessory registry."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StationState(str, Enum):
    """Station lifecycle: waiting for the first valid report, then active."""

    uninitialized = "uninitialized"
    active = "active"


class AccessoryRecord(BaseModel):
    """A sensor registered with the host, as kept in its accessory cache."""

    uuid: str
    key: str = Field(..., description="Station MAC, sensor type and channel.")
    type_tag: str
    registered_at: datetime


class ReportAccepted(BaseModel):
    """Response sent back to the base unit after a report is processed."""

    status: str = "ok"
    sensor_count: int = Field(..., ge=0)


class SensorSnapshot(BaseModel):
    type: str
    channel: Optional[int] = None
    sensor_id: str
    updated_at: Optional[datetime] = None
    state: Dict[str, Any] = Field(default_factory=dict)


class StationSummary(BaseModel):
    """Station metadata and the live sensor inventory."""

    serial_number: str
    model: str
    hardware_revision: str
    firmware_revision: str
    frequency: str
    state: StationState
    last_report_at: Optional[datetime] = None
    sensors: List[SensorSnapshot] = Field(default_factory=list)
