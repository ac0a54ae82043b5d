from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, Optional

from pydantic import ValidationError

from app.schemas import AccessoryRecord
from models.records import SensorIdentity
from services.identity import generate_uuid
from settings import get_settings

logger = logging.getLogger(__name__)


class AccessoryRegistry:
    """In-process stand-in for the host's accessory registry and its cache.

    With a ``persistence_path`` the registered accessories survive restarts
    the same way a host's on-disk accessory cache does.
    """

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._items: Dict[str, AccessoryRecord] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def generate_uuid(self, key: str) -> str:
        return generate_uuid(key)

    def cached_identities(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def is_registered(self, uuid: str) -> bool:
        with self._lock:
            return uuid in self._items

    def register_entity(self, identity: SensorIdentity, type_tag: str) -> None:
        record = AccessoryRecord(
            uuid=identity.uuid,
            key=identity.key,
            type_tag=type_tag,
            registered_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._items[identity.uuid] = record
            self._persist()
        logger.info("Registered accessory", extra={"sensor_id": identity.uuid, "sensor_type": type_tag})

    def unregister_all(self, identities: Iterable[str]) -> int:
        removed = 0
        with self._lock:
            for uuid in identities:
                if self._items.pop(uuid, None) is not None:
                    removed += 1
            self._persist()
        logger.info("Unregistered cached accessories", extra={"sensor_count": removed})
        return removed

    def get_item(self, uuid: str) -> Optional[AccessoryRecord]:
        with self._lock:
            item = self._items.get(uuid)
            if item is None:
                return None
            return item.model_copy(deep=True)

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {uuid: item.model_dump(mode="json") for uuid, item in self._items.items()}
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            data = None

        try:
            if not isinstance(data, dict):
                raise ValueError("Accessory cache is not a JSON object.")
            items = {uuid: AccessoryRecord.model_validate(payload) for uuid, payload in data.items()}
        except (ValueError, ValidationError):
            logger.warning("Accessory cache unreadable, starting empty", extra={"reason": str(self.persistence_path)})
            return

        self._items.update(items)


@lru_cache
def build_default_registry(path: Optional[str] = None) -> AccessoryRegistry:
    settings = get_settings()
    registry_path = settings.registry_path if path is None else path
    persistence = Path(registry_path) if registry_path else None
    return AccessoryRegistry(persistence_path=persistence)
