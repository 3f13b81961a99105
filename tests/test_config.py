"""Tests for oui_lookup.core.config."""
from __future__ import annotations

import logging

import pytest
import yaml

from oui_lookup.core.config import Config, LoggingConfig, configure_logging
from oui_lookup.registry.fetcher import DEFAULT_REGISTRY_URL


ENV_VARS = [
    "OUI_REGISTRY_URL", "OUI_FETCH_TIMEOUT", "OUI_CACHE_BACKEND", "OUI_CACHE_PATH",
    "OUI_RAW_PATH", "OUI_PARSER_STRICT", "WEB_PORT", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    def test_defaults_when_file_missing(self, tmp_path):
        config = Config.from_yaml(str(tmp_path / "missing.yaml"))
        assert config.registry.url == DEFAULT_REGISTRY_URL
        assert config.cache.backend == "json"
        assert config.parser.strict is False

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "registry": {"url": "http://mirror.test/oui.txt", "retries": 1},
            "cache": {"backend": "sqlite", "sqlite_path": "/tmp/v.db"},
            "parser": {"strict": True},
            "web": {"port": 9000},
        }))
        config = Config.from_yaml(str(path))
        assert config.registry.url == "http://mirror.test/oui.txt"
        assert config.registry.retries == 1
        assert config.cache.backend == "sqlite"
        assert config.parser.strict is True
        assert config.web.port == 9000

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OUI_REGISTRY_URL", "http://env.test/oui.txt")
        monkeypatch.setenv("OUI_CACHE_PATH", "/tmp/env.json")
        monkeypatch.setenv("OUI_PARSER_STRICT", "true")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        config = Config.from_yaml(str(tmp_path / "missing.yaml"))
        assert config.registry.url == "http://env.test/oui.txt"
        assert config.cache.json_path == "/tmp/env.json"
        assert config.parser.strict is True
        assert config.logging.level == "DEBUG"

    def test_cache_path_follows_backend(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OUI_CACHE_BACKEND", "SQLite")
        monkeypatch.setenv("OUI_CACHE_PATH", "/tmp/env.db")
        config = Config.from_yaml(str(tmp_path / "missing.yaml"))
        assert config.cache.backend == "sqlite"
        assert config.cache.sqlite_path == "/tmp/env.db"

    def test_round_trip_yaml(self, tmp_path):
        config = Config()
        config.cache.raw_path = "data/oui.txt"
        config.cache.max_age_hours = 24
        config.cache.refresh_cooldown_minutes = 5
        config.registry.user_agent = "inventory-bot/2.0"
        config.logging.format = "%(levelname)s %(message)s"
        config.logging.max_file_size_mb = 50
        config.logging.backup_count = 2
        path = tmp_path / "out.yaml"
        config.to_yaml(str(path))
        loaded = Config.from_yaml(str(path))
        assert loaded == config


class TestConfigureLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "oui.log"
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            configure_logging(LoggingConfig(level="WARNING", file_path=str(log_file)))
            assert root.level == logging.WARNING
            logging.getLogger("oui_lookup.test").warning("written to file")
            for handler in root.handlers:
                handler.flush()
            assert "written to file" in log_file.read_text()
        finally:
            root.setLevel(level)
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()

    def test_verbose_overrides_level(self):
        root = logging.getLogger()
        level = root.level
        try:
            configure_logging(LoggingConfig(level="ERROR"), verbose=True)
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(level)
