"""Authentication and decoding of inbound telemetry submissions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from models.records import CanonicalRecord
from services.errors import AuthenticationError, MalformedPayloadError

logger = logging.getLogger(__name__)

SECRET_FIELD = "PASSKEY"
TIMESTAMP_FIELD = "dateutc"

_TIMESTAMP_FORMATS = ("%Y-%m-%d+%H:%M:%S", "%Y-%m-%d %H:%M:%S")


def decode_report(body: Any, station_secret: str) -> CanonicalRecord:
    """Validate a raw submission and return it as a canonical record.

    Raises ``MalformedPayloadError`` when the body is not a flat key-value
    mapping and ``AuthenticationError`` when the PASSKEY does not match
    exactly. A missing or unreadable ``dateutc`` only costs the record its
    timestamp: the receipt time stands in.
    """
    if not isinstance(body, Mapping):
        raise MalformedPayloadError("Report body is not a key-value mapping.")

    if body.get(SECRET_FIELD) != station_secret:
        raise AuthenticationError("Report not for this station.")

    raw_time = body.get(TIMESTAMP_FIELD)
    try:
        report_time = parse_report_time(str(raw_time or ""))
    except ValueError:
        logger.warning(
            "Report time missing or unreadable, using receipt time",
            extra={"reason": f"{TIMESTAMP_FIELD}={raw_time!r}"},
        )
        report_time = datetime.now(timezone.utc)

    return CanonicalRecord(fields=body, report_time=report_time)


def parse_report_time(value: str) -> datetime:
    candidate = value.strip().replace("%20", " ").replace("%3A", ":")
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.lower() == "now":
        return datetime.now(timezone.utc)

    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)
