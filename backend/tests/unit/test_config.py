"""
Configuration and Logging Unit Tests
"""

import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError

from hyperlink.config import Settings, get_settings
from hyperlink.logging_config import resolve_log_level, setup_logging


def test_defaults(monkeypatch, clear_settings_cache):
    for name in (
        "STORAGE_CLIENT",
        "STORAGE_TTL_SECONDS",
        "STORAGE_MEMORY_PRUNE_INTERVAL_SECONDS",
        "STORAGE_REDIS_ADDR",
    ):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None).storage_config()

    assert config.client == "memory"
    assert config.ttl == timedelta(hours=48)
    assert config.memory.prune_interval == timedelta(minutes=5)
    assert config.redis.addr == "localhost:6379"


def test_env_overrides(monkeypatch, clear_settings_cache):
    monkeypatch.setenv("STORAGE_CLIENT", "external-kv")
    monkeypatch.setenv("STORAGE_TTL_SECONDS", "3600")
    monkeypatch.setenv("STORAGE_REDIS_ADDR", "redis:6380")
    monkeypatch.setenv("STORAGE_REDIS_DB", "2")
    monkeypatch.setenv("STORAGE_REDIS_PASSWORD", "secret")

    config = get_settings().storage_config()

    assert config.client == "external-kv"
    assert config.ttl == timedelta(hours=1)
    assert config.redis.host == "redis"
    assert config.redis.port == 6380
    assert config.redis.db == 2
    assert config.redis.password == "secret"


def test_invalid_redis_db(monkeypatch, clear_settings_cache):
    monkeypatch.setenv("STORAGE_REDIS_DB", "16")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_max_upload_size_parsed_at_load(monkeypatch, clear_settings_cache):
    monkeypatch.setenv("MAX_UPLOAD_SIZE", "10MB")

    assert Settings(_env_file=None).MAX_UPLOAD_SIZE == 10 * 1024 * 1024


def test_invalid_max_upload_size(monkeypatch, clear_settings_cache):
    monkeypatch.setenv("MAX_UPLOAD_SIZE", "lots")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_singleton(clear_settings_cache):
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    "level, debug, expected",
    [
        ("info", False, "INFO"),
        ("debug", False, "DEBUG"),
        ("warn", False, "WARNING"),
        ("error", False, "ERROR"),
        ("bogus", False, "INFO"),
        ("error", True, "DEBUG"),
    ],
)
def test_resolve_log_level(level, debug, expected):
    assert resolve_log_level(level, debug) == expected


def test_setup_logging_applies_level(monkeypatch, clear_settings_cache):
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("DEBUG", "false")

    setup_logging()

    assert logging.getLogger("hyperlink").level == logging.ERROR
