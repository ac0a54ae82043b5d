"""Domain models shared across services."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

_FIRMWARE_PATTERN = re.compile(r"GW1000[A-Z]*_(.*)")


class SensorType(str, Enum):
    """Sensor kinds the base unit can report on."""

    GW1000 = "GW1000"
    WH25 = "WH25"
    WH31 = "WH31"
    WH41 = "WH41"
    WH51 = "WH51"
    WH55 = "WH55"
    WH57 = "WH57"
    WH65 = "WH65"


@dataclass(frozen=True)
class CanonicalRecord(Mapping[str, Any]):
    """A decoded, authenticated telemetry submission.

    The submitted fields are kept verbatim behind a read-only mapping; the
    parsed ``dateutc`` timestamp rides along for logging only.
    """

    fields: Mapping[str, Any]
    report_time: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass(frozen=True, slots=True)
class SensorDescriptor:
    """One physical sensor: its type and, for multi-channel types, its channel."""

    type: SensorType
    channel: Optional[int] = None

    def key(self, station_mac: str) -> str:
        suffix = f"-{self.channel}" if self.channel else ""
        return f"{station_mac}-{self.type.value}{suffix}"

    def __str__(self) -> str:
        if self.channel:
            return f"{self.type.value} channel {self.channel}"
        return self.type.value


@dataclass(frozen=True, slots=True)
class SensorIdentity:
    """Durable identity of a sensor as seen by the host registry."""

    key: str
    uuid: str


def compute_passkey(mac: str) -> str:
    """Return the PASSKEY a base unit with this MAC address sends."""
    return hashlib.md5(mac.encode("utf-8")).hexdigest().upper()


def parse_firmware_revision(hardware_revision: str) -> str:
    match = _FIRMWARE_PATTERN.match(hardware_revision or "")
    return match.group(1) if match else ""


@dataclass
class StationIdentity:
    """Configured identity of the base unit plus metadata from its first report."""

    serial_number: str
    station_secret: str
    model: str = ""
    hardware_revision: str = ""
    firmware_revision: str = ""
    frequency: str = ""

    @classmethod
    def from_mac(cls, mac: str) -> "StationIdentity":
        return cls(serial_number=mac, station_secret=compute_passkey(mac))

    def populate(self, record: Mapping[str, Any]) -> None:
        """Fill in model and revision fields from the first valid report."""
        self.model = str(record.get("model", "") or "")
        self.hardware_revision = str(record.get("stationtype") or self.model)
        self.firmware_revision = parse_firmware_revision(self.hardware_revision)
        self.frequency = str(record.get("freq", "") or "")
