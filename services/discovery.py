"""Infer the attached sensors from the fields present in one report."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from models.records import SensorDescriptor
from services.catalog import SENSOR_CATALOG, DetectionRule
from settings import HiddenCategories

logger = logging.getLogger(__name__)


def is_hidden(rule: DetectionRule, hidden: Optional[HiddenCategories]) -> bool:
    if rule.category is None or hidden is None:
        return False
    return bool(getattr(hidden, rule.category, False))


def discover(
    record: Mapping[str, Any],
    catalog: Iterable[DetectionRule] = SENSOR_CATALOG,
    hidden: Optional[HiddenCategories] = None,
) -> list[SensorDescriptor]:
    """Return the sensors present in ``record`` in catalog order, then channel order."""
    found: list[SensorDescriptor] = []
    for rule in catalog:
        if rule.channels is None:
            if rule.predicate(record, None):
                found.append(SensorDescriptor(rule.type))
            continue

        if is_hidden(rule, hidden):
            logger.debug("Skipping hidden category", extra={"sensor_type": rule.type.value})
            continue

        for channel in rule.channel_range():
            if rule.predicate(record, channel):
                found.append(SensorDescriptor(rule.type, channel))

    return found
