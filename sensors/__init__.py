"""Sensor entity variants and the constructor table keyed by sensor type."""

from __future__ import annotations

from typing import Mapping, Optional, Type

from models.records import SensorIdentity, SensorType
from sensors.base import SensorEntity
from sensors.channels import WH31, WH41, WH51, WH55
from sensors.indoor import GW1000, WH25
from sensors.outdoor import WH57, WH65
from services.errors import UnknownSensorTypeError

EntityTable = Mapping[SensorType, Type[SensorEntity]]

ENTITY_TYPES: EntityTable = {
    cls.sensor_type: cls for cls in (GW1000, WH25, WH31, WH41, WH51, WH55, WH57, WH65)
}


def build_entity(
    sensor_type: SensorType,
    identity: SensorIdentity,
    channel: Optional[int] = None,
    entity_types: EntityTable = ENTITY_TYPES,
) -> SensorEntity:
    try:
        cls = entity_types[sensor_type]
    except KeyError as exc:
        raise UnknownSensorTypeError(getattr(sensor_type, "value", str(sensor_type))) from exc
    return cls(identity, channel)


__all__ = ["ENTITY_TYPES", "EntityTable", "SensorEntity", "build_entity"]
