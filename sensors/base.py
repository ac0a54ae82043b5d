"""Shared update contract and field helpers for sensor entities."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping, Optional

from models.records import CanonicalRecord, SensorIdentity, SensorType

logger = logging.getLogger(__name__)

NO_VALUE = -9999.0
LOW_BATTERY_LEVEL = 1


def read_float(record: Mapping[str, Any], key: str) -> Optional[float]:
    """Return ``record[key]`` as a float, or ``None`` when absent or unusable."""
    raw = record.get(key)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric field", extra={"reason": key})
        return None
    if not math.isfinite(value) or value == NO_VALUE:
        return None
    return value


def fahrenheit_to_celsius(value: float) -> float:
    return round((value - 32.0) * 5.0 / 9.0, 1)


def inhg_to_hpa(value: float) -> float:
    return round(value * 33.8639, 1)


def mph_to_kmh(value: float) -> float:
    return round(value * 1.609344, 1)


def inches_to_mm(value: float) -> float:
    return round(value * 25.4, 1)


class SensorEntity(ABC):
    """One discovered sensor and the state decoded from its fields.

    Subclasses read only their own fields in ``apply`` and return whether
    anything was taken from the record; absent fields must leave prior state
    untouched.
    """

    sensor_type: ClassVar[SensorType]

    def __init__(self, identity: SensorIdentity, channel: Optional[int] = None) -> None:
        self.identity = identity
        self.channel = channel
        self.updated_at: Optional[datetime] = None

    def update(self, record: CanonicalRecord) -> None:
        if self.apply(record):
            self.updated_at = record.report_time

    @abstractmethod
    def apply(self, record: Mapping[str, Any]) -> bool:
        """Copy this sensor's fields out of ``record``."""

    @abstractmethod
    def state(self) -> Dict[str, Any]:
        """Current decoded values."""

    def field(self, template: str) -> str:
        return template.format(channel=self.channel)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "type": self.sensor_type.value,
            "channel": self.channel,
            "sensor_id": self.identity.uuid,
            "updated_at": self.updated_at,
            "state": self.state(),
        }

    def _take(self, record: Mapping[str, Any], key: str, attr: str, convert=None) -> bool:
        value = read_float(record, key)
        if value is None:
            return False
        setattr(self, attr, convert(value) if convert else value)
        return True


class BatteryFlagMixin:
    """Battery reported as 0 (ok) or 1 (low)."""

    battery_low: Optional[bool] = None

    def _take_battery_flag(self, record: Mapping[str, Any], key: str) -> bool:
        value = read_float(record, key)
        if value is None:
            return False
        self.battery_low = value >= 1
        return True


class BatteryLevelMixin:
    """Battery reported as a 0..5 level."""

    battery_level: Optional[int] = None

    @property
    def battery_low(self) -> Optional[bool]:
        if self.battery_level is None:
            return None
        return self.battery_level <= LOW_BATTERY_LEVEL

    def _take_battery_level(self, record: Mapping[str, Any], key: str) -> bool:
        value = read_float(record, key)
        if value is None:
            return False
        self.battery_level = int(value)
        return True
