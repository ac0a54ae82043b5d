"""Outdoor array and lightning detector."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from models.records import SensorType
from sensors.base import (
    BatteryFlagMixin,
    BatteryLevelMixin,
    SensorEntity,
    fahrenheit_to_celsius,
    inches_to_mm,
    mph_to_kmh,
    read_float,
)

logger = logging.getLogger(__name__)


class WH65(BatteryFlagMixin, SensorEntity):
    """Outdoor 7-in-1 array: temperature, humidity, wind, light, UV and rain."""

    sensor_type = SensorType.WH65

    temperature: Optional[float] = None
    humidity: Optional[float] = None
    wind_direction: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_gust: Optional[float] = None
    solar_radiation: Optional[float] = None
    uv_index: Optional[float] = None
    rain_rate: Optional[float] = None
    rain_daily: Optional[float] = None
    rain_total: Optional[float] = None

    def apply(self, record: Mapping[str, Any]) -> bool:
        return any(
            [
                self._take(record, "tempf", "temperature", fahrenheit_to_celsius),
                self._take(record, "humidity", "humidity"),
                self._take(record, "winddir", "wind_direction"),
                self._take(record, "windspeedmph", "wind_speed", mph_to_kmh),
                self._take(record, "windgustmph", "wind_gust", mph_to_kmh),
                self._take(record, "solarradiation", "solar_radiation"),
                self._take(record, "uv", "uv_index"),
                self._take(record, "rainratein", "rain_rate", inches_to_mm),
                self._take(record, "dailyrainin", "rain_daily", inches_to_mm),
                self._take(record, "totalrainin", "rain_total", inches_to_mm),
                self._take_battery_flag(record, "wh65batt"),
            ]
        )

    def state(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "wind_direction": self.wind_direction,
            "wind_speed": self.wind_speed,
            "wind_gust": self.wind_gust,
            "solar_radiation": self.solar_radiation,
            "uv_index": self.uv_index,
            "rain_rate": self.rain_rate,
            "rain_daily": self.rain_daily,
            "rain_total": self.rain_total,
            "battery_low": self.battery_low,
        }


class WH57(BatteryLevelMixin, SensorEntity):
    """Lightning detector."""

    sensor_type = SensorType.WH57

    distance: Optional[float] = None
    strike_count: Optional[int] = None
    last_strike: Optional[datetime] = None

    def apply(self, record: Mapping[str, Any]) -> bool:
        taken = [
            self._take(record, "lightning", "distance"),
            self._take(record, "lightning_num", "strike_count", int),
            self._take_battery_level(record, "wh57batt"),
        ]
        strike_time = read_float(record, "lightning_time")
        if strike_time is not None:
            try:
                self.last_strike = datetime.fromtimestamp(strike_time, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                logger.debug("Ignoring out-of-range lightning_time", extra={"reason": strike_time})
            else:
                taken.append(True)
        return any(taken)

    def state(self) -> Dict[str, Any]:
        return {
            "distance": self.distance,
            "strike_count": self.strike_count,
            "last_strike": self.last_strike,
            "battery_level": self.battery_level,
            "battery_low": self.battery_low,
        }
