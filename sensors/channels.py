"""Multi-channel sensors: one entity per channel the base unit reports."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from models.records import SensorType
from sensors.base import (
    BatteryFlagMixin,
    BatteryLevelMixin,
    SensorEntity,
    fahrenheit_to_celsius,
    read_float,
)

SOIL_LOW_VOLTAGE = 1.2


class WH31(BatteryFlagMixin, SensorEntity):
    """Temperature and humidity probe."""

    sensor_type = SensorType.WH31

    temperature: Optional[float] = None
    humidity: Optional[float] = None

    def apply(self, record: Mapping[str, Any]) -> bool:
        return any(
            [
                self._take(record, self.field("temp{channel}f"), "temperature", fahrenheit_to_celsius),
                self._take(record, self.field("humidity{channel}"), "humidity"),
                self._take_battery_flag(record, self.field("batt{channel}")),
            ]
        )

    def state(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "battery_low": self.battery_low,
        }


class WH41(BatteryLevelMixin, SensorEntity):
    """PM2.5 air quality sensor."""

    sensor_type = SensorType.WH41

    pm25: Optional[float] = None
    pm25_avg_24h: Optional[float] = None

    def apply(self, record: Mapping[str, Any]) -> bool:
        return any(
            [
                self._take(record, self.field("pm25_ch{channel}"), "pm25"),
                self._take(record, self.field("pm25_avg_24h_ch{channel}"), "pm25_avg_24h"),
                self._take_battery_level(record, self.field("pm25batt{channel}")),
            ]
        )

    def state(self) -> Dict[str, Any]:
        return {
            "pm25": self.pm25,
            "pm25_avg_24h": self.pm25_avg_24h,
            "battery_level": self.battery_level,
            "battery_low": self.battery_low,
        }


class WH51(SensorEntity):
    """Soil moisture sensor; its battery is reported in volts."""

    sensor_type = SensorType.WH51

    moisture: Optional[float] = None
    battery_voltage: Optional[float] = None

    @property
    def battery_low(self) -> Optional[bool]:
        if self.battery_voltage is None:
            return None
        return self.battery_voltage < SOIL_LOW_VOLTAGE

    def apply(self, record: Mapping[str, Any]) -> bool:
        return any(
            [
                self._take(record, self.field("soilmoisture{channel}"), "moisture"),
                self._take(record, self.field("soilbatt{channel}"), "battery_voltage"),
            ]
        )

    def state(self) -> Dict[str, Any]:
        return {
            "moisture": self.moisture,
            "battery_voltage": self.battery_voltage,
            "battery_low": self.battery_low,
        }


class WH55(BatteryLevelMixin, SensorEntity):
    """Water leak detector."""

    sensor_type = SensorType.WH55

    leak_detected: Optional[bool] = None

    def apply(self, record: Mapping[str, Any]) -> bool:
        taken = [self._take_battery_level(record, self.field("leakbatt{channel}"))]
        leak = read_float(record, self.field("leak_ch{channel}"))
        if leak is not None:
            self.leak_detected = leak != 0
            taken.append(True)
        return any(taken)

    def state(self) -> Dict[str, Any]:
        return {
            "leak_detected": self.leak_detected,
            "battery_level": self.battery_level,
            "battery_low": self.battery_low,
        }
