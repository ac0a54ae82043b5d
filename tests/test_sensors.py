"""Unit tests for the per-type sensor entities."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import make_record
from models.records import SensorIdentity, SensorType
from sensors import ENTITY_TYPES, build_entity
from sensors.channels import WH31, WH41, WH51, WH55
from sensors.indoor import GW1000, WH25
from sensors.outdoor import WH57, WH65
from services.errors import UnknownSensorTypeError

IDENTITY = SensorIdentity(key="mac-test", uuid="uuid-test")


def test_every_sensor_type_has_a_constructor() -> None:
    assert set(ENTITY_TYPES) == set(SensorType)
    for sensor_type, cls in ENTITY_TYPES.items():
        assert cls.sensor_type is sensor_type


def test_build_entity_binds_identity_and_channel() -> None:
    entity = build_entity(SensorType.WH31, IDENTITY, 3)

    assert isinstance(entity, WH31)
    assert entity.identity == IDENTITY
    assert entity.channel == 3


def test_build_entity_rejects_unknown_type() -> None:
    with pytest.raises(UnknownSensorTypeError):
        build_entity(SensorType.WH31, IDENTITY, 1, entity_types={})


def test_gateway_reads_indoor_fields() -> None:
    entity = GW1000(IDENTITY)

    entity.update(make_record(tempinf="68", humidityin="40", baromrelin="29.92"))

    assert entity.temperature == 20.0
    assert entity.humidity == 40.0
    assert entity.pressure_relative == 1013.2
    assert entity.pressure_absolute is None


def test_wh25_battery_flag() -> None:
    entity = WH25(IDENTITY)

    entity.update(make_record(wh25batt="1", tempinf="77"))

    assert entity.battery_low is True
    assert entity.temperature == 25.0


def test_wh31_reads_only_its_channel() -> None:
    entity = WH31(IDENTITY, 2)

    entity.update(make_record(temp1f="32", humidity1="10", batt1="1", temp2f="68", humidity2="55", batt2="0"))

    assert entity.state() == {"temperature": 20.0, "humidity": 55.0, "battery_low": False}


def test_wh41_battery_level() -> None:
    entity = WH41(IDENTITY, 1)

    entity.update(make_record(pm25_ch1="12.5", pm25_avg_24h_ch1="9", pm25batt1="1"))

    assert entity.pm25 == 12.5
    assert entity.pm25_avg_24h == 9.0
    assert entity.battery_level == 1
    assert entity.battery_low is True


def test_wh51_low_voltage() -> None:
    entity = WH51(IDENTITY, 4)

    entity.update(make_record(soilmoisture4="37", soilbatt4="1.1"))

    assert entity.moisture == 37.0
    assert entity.battery_low is True


def test_wh55_leak_flag() -> None:
    entity = WH55(IDENTITY, 1)

    entity.update(make_record(leak_ch1="1", leakbatt1="4"))
    assert entity.leak_detected is True
    assert entity.battery_low is False

    entity.update(make_record(leak_ch1="0"))
    assert entity.leak_detected is False


def test_wh57_lightning() -> None:
    entity = WH57(IDENTITY)

    entity.update(make_record(lightning="12", lightning_num="3", lightning_time="1609459200", wh57batt="5"))

    assert entity.distance == 12.0
    assert entity.strike_count == 3
    assert entity.last_strike == datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert entity.battery_low is False


def test_wh65_ignores_no_value_sentinel() -> None:
    entity = WH65(IDENTITY)
    entity.update(make_record(tempf="50", windspeedmph="10"))

    entity.update(make_record(tempf="-9999", windspeedmph="-9999", wh65batt="0"))

    assert entity.temperature == 10.0
    assert entity.wind_speed == 16.1
    assert entity.battery_low is False


def test_non_numeric_fields_are_ignored() -> None:
    entity = WH31(IDENTITY, 1)

    entity.update(make_record(temp1f="n/a"))

    assert entity.temperature is None
    assert entity.updated_at is None


@pytest.mark.parametrize("cls, channel", [(cls, 1) for cls in ENTITY_TYPES.values()])
def test_update_without_own_fields_is_a_no_op(cls, channel) -> None:
    entity = cls(IDENTITY, channel)
    before = entity.snapshot()

    entity.update(make_record(unrelated="1"))

    assert entity.snapshot() == before
    assert entity.updated_at is None


def test_update_without_own_fields_keeps_prior_state() -> None:
    entity = WH31(IDENTITY, 1)
    entity.update(make_record(temp1f="68", humidity1="50", batt1="0"))
    before = entity.snapshot()

    entity.update(make_record(wh25batt="0"))

    assert entity.snapshot() == before


@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", "NaN"])
def test_non_finite_values_are_ignored(raw: str) -> None:
    entity = WH57(IDENTITY)

    entity.update(make_record(wh57batt=raw, lightning="12"))

    assert entity.distance == 12.0
    assert entity.battery_level is None
    assert entity.updated_at == datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_out_of_range_lightning_time_is_ignored() -> None:
    entity = WH57(IDENTITY)

    entity.update(make_record(lightning_time="1e20", lightning_num="2"))

    assert entity.last_strike is None
    assert entity.strike_count == 2
    assert entity.updated_at is not None
