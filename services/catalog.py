"""Declarative detection rules for the sensors a base unit can report."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from models.records import SensorType

Predicate = Callable[[Mapping[str, Any], Optional[int]], bool]

_GATEWAY_MODEL = re.compile(r"GW1000")


def _model_matches(record: Mapping[str, Any], _channel: Optional[int]) -> bool:
    return bool(_GATEWAY_MODEL.search(str(record.get("model", ""))))


def _field_present(template: str) -> Predicate:
    def predicate(record: Mapping[str, Any], channel: Optional[int]) -> bool:
        return template.format(channel=channel) in record

    return predicate


@dataclass(frozen=True)
class DetectionRule:
    """How to spot one sensor type in a report.

    ``channels`` is the highest channel number for multi-channel types and
    ``None`` for single-instance types; ``category`` names the hidden flag
    that suppresses the whole type.
    """

    type: SensorType
    predicate: Predicate
    channels: Optional[int] = None
    category: Optional[str] = None

    def channel_range(self) -> range:
        return range(1, (self.channels or 0) + 1)


SENSOR_CATALOG: tuple[DetectionRule, ...] = (
    DetectionRule(SensorType.GW1000, _model_matches),
    DetectionRule(SensorType.WH25, _field_present("wh25batt")),
    DetectionRule(SensorType.WH57, _field_present("wh57batt")),
    DetectionRule(SensorType.WH65, _field_present("wh65batt")),
    DetectionRule(SensorType.WH31, _field_present("batt{channel}"), channels=8, category="th"),
    DetectionRule(SensorType.WH41, _field_present("pm25batt{channel}"), channels=4, category="pm25"),
    DetectionRule(SensorType.WH51, _field_present("soilbatt{channel}"), channels=8, category="soil"),
    DetectionRule(SensorType.WH55, _field_present("leakbatt{channel}"), channels=4, category="leak"),
)
