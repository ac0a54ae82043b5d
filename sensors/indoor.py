"""Base unit and indoor sensor entities."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from models.records import SensorType
from sensors.base import BatteryFlagMixin, SensorEntity, fahrenheit_to_celsius, inhg_to_hpa


class IndoorClimate(SensorEntity):
    """Indoor temperature, humidity and pressure as reported by the base unit."""

    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure_relative: Optional[float] = None
    pressure_absolute: Optional[float] = None

    def _take_indoor(self, record: Mapping[str, Any]) -> list[bool]:
        return [
            self._take(record, "tempinf", "temperature", fahrenheit_to_celsius),
            self._take(record, "humidityin", "humidity"),
            self._take(record, "baromrelin", "pressure_relative", inhg_to_hpa),
            self._take(record, "baromabsin", "pressure_absolute", inhg_to_hpa),
        ]

    def _indoor_state(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure_relative": self.pressure_relative,
            "pressure_absolute": self.pressure_absolute,
        }


class GW1000(IndoorClimate):
    sensor_type = SensorType.GW1000

    def apply(self, record: Mapping[str, Any]) -> bool:
        return any(self._take_indoor(record))

    def state(self) -> Dict[str, Any]:
        return self._indoor_state()


class WH25(BatteryFlagMixin, IndoorClimate):
    """Indoor thermo-hygro-barometer."""

    sensor_type = SensorType.WH25

    def apply(self, record: Mapping[str, Any]) -> bool:
        taken = self._take_indoor(record)
        taken.append(self._take_battery_flag(record, "wh25batt"))
        return any(taken)

    def state(self) -> Dict[str, Any]:
        return {**self._indoor_state(), "battery_low": self.battery_low}
