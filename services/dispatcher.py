"""Fan an accepted report out to every registered sensor entity."""

from __future__ import annotations

import logging
from typing import Iterable

from models.records import CanonicalRecord
from sensors.base import SensorEntity

logger = logging.getLogger(__name__)


class UpdateDispatcher:
    """Calls ``update`` on each entity in inventory order.

    Entities are not filtered by whether their fields appear in the record;
    each one decides for itself what to take.
    """

    def dispatch(self, entities: Iterable[SensorEntity], record: CanonicalRecord) -> int:
        updated = 0
        for entity in entities:
            extra = {
                "sensor_type": entity.sensor_type.value,
                "channel": entity.channel,
            }
            logger.debug("Updating sensor", extra=extra)
            try:
                entity.update(record)
            except Exception:
                logger.exception("Sensor update failed", extra=extra)
                continue
            updated += 1
        return updated
