from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_STATION_MAC_ENV = "ECOWITT_STATION_MAC"
_REPORT_PATH_ENV = "ECOWITT_REPORT_PATH"
_REPORT_HOST_ENV = "ECOWITT_REPORT_HOST"
_REPORT_PORT_ENV = "ECOWITT_REPORT_PORT"
_HIDE_TH_ENV = "ECOWITT_HIDE_TH"
_HIDE_PM25_ENV = "ECOWITT_HIDE_PM25"
_HIDE_SOIL_ENV = "ECOWITT_HIDE_SOIL"
_HIDE_LEAK_ENV = "ECOWITT_HIDE_LEAK"
_UNREGISTER_CACHED_ENV = "ECOWITT_UNREGISTER_CACHED"
_REGISTRY_PATH_ENV = "ECOWITT_REGISTRY_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class HiddenCategories:
    """Per-category switches that suppress multi-channel sensor discovery."""

    th: bool = False
    pm25: bool = False
    soil: bool = False
    leak: bool = False


@dataclass(frozen=True)
class Settings:
    station_mac: str
    report_path: str
    report_host: str
    report_port: int
    hidden: HiddenCategories
    unregister_cached_on_startup: bool
    registry_path: Optional[str]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    return default


def _read_port(default: int) -> int:
    value = os.getenv(_REPORT_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_report_path(default: str) -> str:
    candidate = _read_str_env(_REPORT_PATH_ENV, default)
    if not candidate.startswith("/"):
        candidate = "/" + candidate
    return candidate


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        station_mac=_read_str_env(_STATION_MAC_ENV, ""),
        report_path=_read_report_path("/data/report"),
        report_host=_read_str_env(_REPORT_HOST_ENV, "0.0.0.0"),
        report_port=_read_port(8080),
        hidden=HiddenCategories(
            th=_read_bool_env(_HIDE_TH_ENV, False),
            pm25=_read_bool_env(_HIDE_PM25_ENV, False),
            soil=_read_bool_env(_HIDE_SOIL_ENV, False),
            leak=_read_bool_env(_HIDE_LEAK_ENV, False),
        ),
        unregister_cached_on_startup=_read_bool_env(_UNREGISTER_CACHED_ENV, True),
        registry_path=_read_optional_env(_REGISTRY_PATH_ENV, None),
        log_level=_read_log_level("INFO"),
    )
