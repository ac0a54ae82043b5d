"""Diff freshly discovered sensors against the registered inventory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from models.records import SensorDescriptor


@dataclass
class ReconcilePlan:
    """Descriptors to register now, and descriptors already tracked.

    Registered descriptors missing from the latest report appear in neither
    list: the inventory only ever grows.
    """

    to_add: list[SensorDescriptor] = field(default_factory=list)
    to_keep: list[SensorDescriptor] = field(default_factory=list)


def reconcile(
    current: Iterable[SensorDescriptor],
    discovered: Iterable[SensorDescriptor],
) -> ReconcilePlan:
    plan = ReconcilePlan()
    registered = set(current)
    seen: set[SensorDescriptor] = set()
    for descriptor in discovered:
        if descriptor in seen:
            continue
        seen.add(descriptor)
        if descriptor in registered:
            plan.to_keep.append(descriptor)
        else:
            plan.to_add.append(descriptor)
    return plan
