from __future__ import annotations

import pytest

from sms_dump.config import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MONGO_URI",
        "MONGO_DATABASE",
        "MONGO_COLLECTION",
        "MONGO_CONNECT_TIMEOUT",
        "HOST",
        "PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.mongo_uri == "mongodb://localhost:27017"
    assert settings.database_name == "sms"
    assert settings.collection_name == "sms-dumped"
    assert settings.connect_timeout_seconds == 10.0
    assert settings.port == 8081
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb://mongo:27017")
    monkeypatch.setenv("MONGO_DATABASE", "events")
    monkeypatch.setenv("MONGO_COLLECTION", "inbox")
    monkeypatch.setenv("MONGO_CONNECT_TIMEOUT", "2.5")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    get_settings.cache_clear()
    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert settings.mongo_uri == "mongodb://mongo:27017"
    assert settings.database_name == "events"
    assert settings.collection_name == "inbox"
    assert settings.connect_timeout_seconds == 2.5
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"
