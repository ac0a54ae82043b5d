"""Per-station report pipeline: decode, discover, reconcile, dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from threading import Lock
from typing import Any, Iterable, Optional, Protocol

from app.schemas import SensorSnapshot, StationState, StationSummary
from datastore.accessory_registry import build_default_registry
from models.records import CanonicalRecord, SensorDescriptor, SensorIdentity, StationIdentity
from sensors import ENTITY_TYPES, EntityTable, SensorEntity, build_entity
from services.catalog import SENSOR_CATALOG, DetectionRule
from services.decoder import decode_report
from services.discovery import discover
from services.dispatcher import UpdateDispatcher
from services.errors import AuthenticationError, MalformedPayloadError, UnknownSensorTypeError
from services.identity import identify
from services.reconciler import reconcile
from settings import HiddenCategories, get_settings

logger = logging.getLogger(__name__)


class HostRegistry(Protocol):
    """What the station needs from the host it registers sensors with."""

    def generate_uuid(self, key: str) -> str: ...

    def cached_identities(self) -> list[str]: ...

    def is_registered(self, uuid: str) -> bool: ...

    def register_entity(self, identity: SensorIdentity, type_tag: str) -> None: ...

    def unregister_all(self, identities: Iterable[str]) -> int: ...


@dataclass
class InventoryEntry:
    descriptor: SensorDescriptor
    identity: SensorIdentity
    entity: SensorEntity


class Station:
    """Owns one base unit's identity and sensor inventory.

    Reports must be handed over one at a time; ``handle_report`` holds a lock
    for the whole pipeline so a second caller waits rather than interleaves.
    """

    def __init__(
        self,
        mac: str,
        registry: HostRegistry,
        hidden: Optional[HiddenCategories] = None,
        catalog: Iterable[DetectionRule] = SENSOR_CATALOG,
        entity_types: EntityTable = ENTITY_TYPES,
        unregister_cached_on_startup: bool = True,
        dispatcher: Optional[UpdateDispatcher] = None,
    ) -> None:
        self.mac = mac
        self.identity = StationIdentity.from_mac(mac)
        self.registry = registry
        self.hidden = hidden or HiddenCategories()
        self.catalog = tuple(catalog)
        self.entity_types = entity_types
        self.unregister_cached_on_startup = unregister_cached_on_startup
        self.dispatcher = dispatcher or UpdateDispatcher()
        self.state = StationState.uninitialized
        self.inventory: list[InventoryEntry] = []
        self.last_report_at: Optional[datetime] = None
        self._started = False
        self._lock = Lock()

    def start(self) -> None:
        """Apply the startup policy for accessories left in the host cache."""
        with self._lock:
            self._start()

    def handle_report(self, body: Any, remote_addr: Optional[str] = None) -> CanonicalRecord:
        """Run one submission through the pipeline.

        Decoding errors are logged and re-raised for the transport to answer;
        they leave the inventory untouched.
        """
        extra = {"station": self.mac, "remote_addr": remote_addr}
        with self._lock:
            if not self._started:
                self._start()

            try:
                if not self.mac:
                    raise AuthenticationError("No station MAC configured.")
                record = decode_report(body, self.identity.station_secret)
            except AuthenticationError as exc:
                logger.warning("Report not for this station", extra={**extra, "reason": str(exc)})
                raise
            except MalformedPayloadError as exc:
                logger.warning("Discarding malformed report", extra={**extra, "reason": str(exc)})
                raise

            logger.info("Report received", extra={**extra, "report_time": record.report_time.isoformat()})

            if self.state is StationState.uninitialized:
                self.identity.populate(record)
                logger.info(
                    "Station identified as %s (hardware %s, firmware %s)",
                    self.identity.model or "unknown model",
                    self.identity.hardware_revision or "unknown",
                    self.identity.firmware_revision or "unknown",
                    extra=extra,
                )
                self.state = StationState.active

            discovered = discover(record, self.catalog, self.hidden)
            plan = reconcile(self.descriptors(), discovered)
            for descriptor in plan.to_add:
                self._add_sensor(descriptor)

            self.dispatcher.dispatch(self.entities(), record)
            self.last_report_at = record.report_time
            return record

    def descriptors(self) -> list[SensorDescriptor]:
        return [entry.descriptor for entry in self.inventory]

    def entities(self) -> list[SensorEntity]:
        return [entry.entity for entry in self.inventory]

    def snapshot(self) -> StationSummary:
        with self._lock:
            return StationSummary(
                serial_number=self.identity.serial_number,
                model=self.identity.model,
                hardware_revision=self.identity.hardware_revision,
                firmware_revision=self.identity.firmware_revision,
                frequency=self.identity.frequency,
                state=self.state,
                last_report_at=self.last_report_at,
                sensors=[SensorSnapshot(**entry.entity.snapshot()) for entry in self.inventory],
            )

    def _start(self) -> None:
        if self._started:
            return
        self._started = True
        if not self.unregister_cached_on_startup:
            logger.info("Keeping cached accessories", extra={"station": self.mac})
            return
        cached = self.registry.cached_identities()
        logger.info(
            "Unregistering cached accessories",
            extra={"station": self.mac, "sensor_count": len(cached)},
        )
        self.registry.unregister_all(cached)

    def _add_sensor(self, descriptor: SensorDescriptor) -> None:
        extra = {
            "station": self.mac,
            "sensor_type": descriptor.type.value,
            "channel": descriptor.channel,
        }
        identity = identify(self.mac, descriptor, self.registry.generate_uuid)
        try:
            entity = build_entity(descriptor.type, identity, descriptor.channel, self.entity_types)
        except UnknownSensorTypeError as exc:
            logger.error("Unhandled sensor type", extra={**extra, "reason": str(exc)})
            return

        extra["sensor_id"] = identity.uuid
        logger.info("Discovered sensor %s", descriptor, extra=extra)
        if not self.unregister_cached_on_startup and self.registry.is_registered(identity.uuid):
            logger.info("Restoring accessory from cache", extra=extra)
        else:
            self.registry.register_entity(identity, descriptor.type.value)

        self.inventory.append(InventoryEntry(descriptor=descriptor, identity=identity, entity=entity))


@lru_cache
def build_default_station() -> Station:
    """Factory that wires the station from settings and the default registry."""
    settings = get_settings()
    if not settings.station_mac:
        logger.warning("No station MAC configured; every report will be rejected")
    return Station(
        mac=settings.station_mac,
        registry=build_default_registry(),
        hidden=settings.hidden,
        unregister_cached_on_startup=settings.unregister_cached_on_startup,
    )
