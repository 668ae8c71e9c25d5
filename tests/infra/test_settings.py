from __future__ import annotations

import pytest

from adbridge.infra.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    Settings.reset()
    yield
    Settings.reset()


def test_defaults_come_from_packaged_yaml():
    s = get_settings()
    assert s.get("http.upload_timeout_s") == 120
    assert s.get("distribution.max_parallel_platforms") == 4
    assert s.get("no.such.key", "fallback") == "fallback"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ADBRIDGE_HTTP_TIMEOUT_S", "12.5")
    monkeypatch.setenv("ADBRIDGE_MAX_PARALLEL_PLATFORMS", "2")
    monkeypatch.setenv("ADBRIDGE_LOG_FORMAT", "json")
    s = get_settings()
    assert s.get("http.timeout_s") == 12.5
    assert s.get("distribution.max_parallel_platforms") == 2
    assert s.get("logging.format") == "json"


def test_settings_is_a_process_singleton():
    assert get_settings() is get_settings()
