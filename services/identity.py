"""Stable identities for discovered sensors."""

from __future__ import annotations

import uuid
from typing import Callable

from models.records import SensorDescriptor, SensorIdentity

UuidGenerator = Callable[[str], str]

_SENSOR_NAMESPACE = uuid.UUID("6c1f8a8e-3b0e-5d8e-9f43-2d7c1b8e4a10")


def generate_uuid(key: str) -> str:
    """Deterministic UUID for a sensor key, identical across restarts."""
    return str(uuid.uuid5(_SENSOR_NAMESPACE, key))


def identify(
    station_mac: str,
    descriptor: SensorDescriptor,
    generator: UuidGenerator = generate_uuid,
) -> SensorIdentity:
    key = descriptor.key(station_mac)
    return SensorIdentity(key=key, uuid=generator(key))
