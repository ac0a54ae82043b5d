from __future__ import annotations

from datastore.accessory_registry import build_default_registry
from services.station import build_default_station
from settings import HiddenCategories, get_settings


def _clear_caches() -> None:
    for cache in (get_settings, build_default_registry, build_default_station):
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    registry_path = tmp_path / "accessories.json"

    monkeypatch.setenv("ECOWITT_STATION_MAC", "11:22:33:44:55:66")
    monkeypatch.setenv("ECOWITT_REPORT_PATH", "ecowitt")
    monkeypatch.setenv("ECOWITT_REPORT_PORT", "9000")
    monkeypatch.setenv("ECOWITT_HIDE_TH", "yes")
    monkeypatch.setenv("ECOWITT_HIDE_LEAK", "1")
    monkeypatch.setenv("ECOWITT_UNREGISTER_CACHED", "false")
    monkeypatch.setenv("ECOWITT_REGISTRY_PATH", str(registry_path))
    _clear_caches()

    try:
        settings = get_settings()
        station = build_default_station()

        assert settings.report_path == "/ecowitt"
        assert settings.report_port == 9000
        assert settings.hidden == HiddenCategories(th=True, leak=True)
        assert station.mac == "11:22:33:44:55:66"
        assert station.unregister_cached_on_startup is False
        assert station.hidden.th is True
        assert station.registry.persistence_path == registry_path
    finally:
        _clear_caches()


def test_malformed_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("ECOWITT_REPORT_PORT", "not-a-port")
    monkeypatch.setenv("ECOWITT_HIDE_SOIL", "maybe")
    monkeypatch.setenv("ECOWITT_UNREGISTER_CACHED", "")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    _clear_caches()

    try:
        settings = get_settings()

        assert settings.report_port == 8080
        assert settings.hidden.soil is False
        assert settings.unregister_cached_on_startup is True
        assert settings.log_level == "DEBUG"
        assert settings.report_path == "/data/report"
    finally:
        _clear_caches()
