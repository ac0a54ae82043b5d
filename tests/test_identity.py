"""Unit tests for sensor identity derivation."""

from __future__ import annotations

from itertools import combinations

from models.records import SensorDescriptor, SensorType
from services.identity import generate_uuid, identify

MAC = "AA:BB:CC:DD:EE:FF"


def test_key_includes_channel_only_when_present() -> None:
    assert identify(MAC, SensorDescriptor(SensorType.WH25)).key == f"{MAC}-WH25"
    assert identify(MAC, SensorDescriptor(SensorType.WH31, 3)).key == f"{MAC}-WH31-3"


def test_identity_is_deterministic() -> None:
    descriptor = SensorDescriptor(SensorType.WH41, 2)

    assert identify(MAC, descriptor) == identify(MAC, descriptor)
    assert identify(MAC, descriptor).uuid == generate_uuid(f"{MAC}-WH41-2")


def test_distinct_descriptors_get_distinct_identities() -> None:
    descriptors = [SensorDescriptor(sensor_type) for sensor_type in SensorType] + [
        SensorDescriptor(SensorType.WH31, channel) for channel in range(1, 9)
    ]

    for first, second in combinations(descriptors, 2):
        assert identify(MAC, first).uuid != identify(MAC, second).uuid


def test_identity_depends_on_station() -> None:
    descriptor = SensorDescriptor(SensorType.WH65)

    assert identify(MAC, descriptor) != identify("11:22:33:44:55:66", descriptor)


def test_custom_generator_is_used() -> None:
    identity = identify(MAC, SensorDescriptor(SensorType.WH57), generator=str.lower)

    assert identity.uuid == f"{MAC}-WH57".lower()
