"""Unit tests for the sensor catalog and discovery."""

from __future__ import annotations

from conftest import make_record
from models.records import SensorDescriptor, SensorType
from services.catalog import SENSOR_CATALOG
from services.discovery import discover
from settings import HiddenCategories


def test_catalog_covers_every_sensor_type() -> None:
    assert {rule.type for rule in SENSOR_CATALOG} == set(SensorType)


def test_empty_record_discovers_nothing() -> None:
    assert discover(make_record()) == []


def test_gateway_detected_from_model() -> None:
    assert discover(make_record(model="GW1000_Pro")) == [SensorDescriptor(SensorType.GW1000)]
    assert discover(make_record(model="HP2550")) == []


def test_single_instance_sensors_detected_by_battery_field() -> None:
    record = make_record(wh65batt="0", wh57batt="5", wh25batt="0")

    assert discover(record) == [
        SensorDescriptor(SensorType.WH25),
        SensorDescriptor(SensorType.WH57),
        SensorDescriptor(SensorType.WH65),
    ]


def test_order_is_catalog_then_channel() -> None:
    record = make_record(
        leakbatt2="4",
        soilbatt3="1.5",
        pm25batt1="5",
        batt8="0",
        batt2="0",
        wh25batt="0",
        model="GW1000_Pro",
    )

    assert discover(record) == [
        SensorDescriptor(SensorType.GW1000),
        SensorDescriptor(SensorType.WH25),
        SensorDescriptor(SensorType.WH31, 2),
        SensorDescriptor(SensorType.WH31, 8),
        SensorDescriptor(SensorType.WH41, 1),
        SensorDescriptor(SensorType.WH51, 3),
        SensorDescriptor(SensorType.WH55, 2),
    ]


def test_channels_beyond_range_are_ignored() -> None:
    record = make_record(batt9="0", pm25batt5="5", leakbatt5="5", soilbatt9="1.5")

    assert discover(record) == []


def test_hidden_category_suppresses_whole_type() -> None:
    record = make_record(**{f"batt{channel}": "0" for channel in range(1, 9)}, pm25batt1="5")

    found = discover(record, hidden=HiddenCategories(th=True))

    assert all(descriptor.type is not SensorType.WH31 for descriptor in found)
    assert found == [SensorDescriptor(SensorType.WH41, 1)]


def test_each_hidden_flag_maps_to_its_category() -> None:
    record = make_record(batt1="0", pm25batt1="5", soilbatt1="1.5", leakbatt1="5")

    found = discover(record, hidden=HiddenCategories(th=True, pm25=True, soil=True, leak=True))

    assert found == []


def test_discovery_is_idempotent() -> None:
    record = make_record(wh25batt="0", batt1="0", leakbatt3="5", model="GW1000_Pro")

    assert discover(record) == discover(record)
