from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from datastore.accessory_registry import AccessoryRegistry
from models.records import CanonicalRecord, compute_passkey
from services.station import Station

STATION_MAC = "AA:BB:CC:DD:EE:FF"
PASSKEY = compute_passkey(STATION_MAC)


def make_report(**fields: Any) -> Dict[str, Any]:
    """Build a raw submission carrying this station's PASSKEY."""

    body: Dict[str, Any] = {
        "PASSKEY": PASSKEY,
        "stationtype": "GW1000A_V1.6.8",
        "dateutc": "2021-01-02+03:04:05",
        "freq": "915M",
        "model": "HP2550",
    }
    body.update(fields)
    return body


def make_record(**fields: Any) -> CanonicalRecord:
    return CanonicalRecord(fields=fields, report_time=datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc))


@pytest.fixture()
def registry() -> AccessoryRegistry:
    return AccessoryRegistry()


@pytest.fixture()
def station(registry: AccessoryRegistry) -> Station:
    return Station(mac=STATION_MAC, registry=registry)
