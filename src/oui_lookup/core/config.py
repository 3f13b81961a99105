"""
Configuration management for the OUI lookup service.

Loads configuration from YAML files and environment variables.
"""

import logging
import logging.handlers
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml

from ..registry.fetcher import DEFAULT_REGISTRY_URL, DEFAULT_USER_AGENT


@dataclass
class RegistryConfig:
    """Registry download configuration."""

    url: str = DEFAULT_REGISTRY_URL
    timeout_seconds: float = 30.0
    retries: int = 3
    backoff_seconds: float = 2.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class CacheConfig:
    """Parsed record and raw dump cache configuration."""

    backend: str = "json"  # json or sqlite
    json_path: str = "data/vendors.json"
    sqlite_path: str = "data/vendors.db"
    raw_path: Optional[str] = None  # keep the unparsed dump when set
    max_age_hours: Optional[float] = None  # None disables background refresh
    refresh_cooldown_minutes: float = 15.0  # wait after a failed refresh


@dataclass
class ParserConfig:
    """Registry parser policy."""

    strict: bool = False  # abort on the first malformed entry


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class WebConfig:
    """REST API configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class Config:
    """Main configuration container."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(path)
        if not config_path.exists():
            config = cls()
            config._apply_env_overrides()
            return config

        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        config = cls()

        if "registry" in data:
            config.registry = RegistryConfig(**data["registry"])

        if "cache" in data:
            config.cache = CacheConfig(**data["cache"])

        if "parser" in data:
            config.parser = ParserConfig(**data["parser"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        if "web" in data:
            config.web = WebConfig(**data["web"])

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        # Registry settings
        if os.getenv("OUI_REGISTRY_URL"):
            self.registry.url = os.getenv("OUI_REGISTRY_URL")
        if os.getenv("OUI_FETCH_TIMEOUT"):
            self.registry.timeout_seconds = float(os.getenv("OUI_FETCH_TIMEOUT"))

        # Cache settings
        if os.getenv("OUI_CACHE_BACKEND"):
            self.cache.backend = os.getenv("OUI_CACHE_BACKEND").lower()
        if os.getenv("OUI_CACHE_PATH"):
            if self.cache.backend == "sqlite":
                self.cache.sqlite_path = os.getenv("OUI_CACHE_PATH")
            else:
                self.cache.json_path = os.getenv("OUI_CACHE_PATH")
        if os.getenv("OUI_RAW_PATH"):
            self.cache.raw_path = os.getenv("OUI_RAW_PATH")

        # Parser settings
        if os.getenv("OUI_PARSER_STRICT"):
            self.parser.strict = os.getenv("OUI_PARSER_STRICT").lower() == "true"

        # Web settings
        if os.getenv("WEB_PORT"):
            self.web.port = int(os.getenv("WEB_PORT"))

        # Logging
        if os.getenv("LOG_LEVEL"):
            self.logging.level = os.getenv("LOG_LEVEL")

    def to_yaml(self, path: str):
        """Save configuration to YAML file."""
        data = {
            "registry": {
                "url": self.registry.url,
                "timeout_seconds": self.registry.timeout_seconds,
                "retries": self.registry.retries,
                "backoff_seconds": self.registry.backoff_seconds,
                "user_agent": self.registry.user_agent,
            },
            "cache": {
                "backend": self.cache.backend,
                "json_path": self.cache.json_path,
                "sqlite_path": self.cache.sqlite_path,
                "raw_path": self.cache.raw_path,
                "max_age_hours": self.cache.max_age_hours,
                "refresh_cooldown_minutes": self.cache.refresh_cooldown_minutes,
            },
            "parser": {
                "strict": self.parser.strict,
            },
            "web": {
                "host": self.web.host,
                "port": self.web.port,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file_path": self.logging.file_path,
                "max_file_size_mb": self.logging.max_file_size_mb,
                "backup_count": self.logging.backup_count,
            },
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def configure_logging(config: LoggingConfig, verbose: bool = False):
    """Configure the root logger from a LoggingConfig."""
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format)
    root = logging.getLogger()
    root.setLevel(level)

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        root.addHandler(handler)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    # Check common locations
    candidates = [
        Path("config/config.yaml"),
        Path("config.yaml"),
        Path.home() / ".oui-lookup" / "config.yaml",
        Path("/etc/oui-lookup/config.yaml"),
    ]

    for path in candidates:
        if path.exists():
            return str(path)

    # Return the first candidate as default
    return str(candidates[0])
