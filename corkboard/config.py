"""
Corkboard Configuration Module

Handles loading, validation, and management of configuration settings.
"""

import os
import sys
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

SECURITY_STRENGTH_ENV = "CORKBOARD_SECURITY_STRENGTH"


@dataclass
class SecurityConfig:
    """Credential hashing settings."""
    hash_time_cost: int = 11
    hash_memory_kb: int = 32768  # 32MB
    hash_parallelism: int = 1

    def apply_env_overrides(self):
        """Take the hash cost factor from the environment when set."""
        value = os.environ.get(SECURITY_STRENGTH_ENV)
        if not value:
            return

        try:
            self.hash_time_cost = int(value)
        except ValueError:
            logger.warning(f"Ignoring non-integer {SECURITY_STRENGTH_ENV}={value!r}")


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: str = ""


@dataclass
class Config:
    """Main configuration container."""
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.security.hash_time_cost < 1:
            errors.append("security.hash_time_cost must be at least 1")
        if self.security.hash_memory_kb < 8 * self.security.hash_parallelism:
            errors.append("security.hash_memory_kb must be at least 8 KB per lane")
        if self.security.hash_parallelism < 1:
            errors.append("security.hash_parallelism must be at least 1")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.logging.level.upper() not in valid_levels:
            errors.append(f"logging.level must be one of: {valid_levels}")

        return errors

    def save(self, path: Path):
        """Save configuration to TOML file."""
        import toml  # For writing

        with open(path, "w") as f:
            toml.dump(self._to_dict(), f)

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        from dataclasses import asdict
        return asdict(self)


def load_config(path: Path) -> Config:
    """Load configuration from TOML file, then apply environment overrides."""
    config = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        if "security" in data:
            config.security = SecurityConfig(**data["security"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

    config.security.apply_env_overrides()
    return config


def create_default_config(path: Path):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
