"""Configuration management for pepload.

Config resolution order (highest priority first):
1. Programmatic (PepLoadConfig constructed in code, installed with configure())
2. Environment variables (PEPLOAD_BUFFER_SIZE, PEPLOAD_RAW_FORMAT, PEPLOAD_CLI_MODE)
3. Config file (~/.config/pepload/config.json, managed by `pepload config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "pepload"
CONFIG_FILE = CONFIG_DIR / "config.json"

RAW_FORMATS = ("json", "yaml")
CLI_MODES = ("human", "agent")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class DefaultsConfig:
    """Loader defaults.

    - buffer_size: size in bytes of the buffer each request is encoded into
    - raw_format: format of documents passed as literal strings (json or yaml)
    """

    buffer_size: int = 10240
    raw_format: str = "json"


@dataclass
class CliConfig:
    """CLI behavior. mode="agent" forces JSON output."""

    mode: str = "human"


@dataclass
class PepLoadConfig:
    """Top-level pepload configuration.

    Examples:
        # Package use, no files needed
        config = PepLoadConfig(defaults=DefaultsConfig(buffer_size=65536))

        # CLI use, loads from ~/.config/pepload/config.json
        config = PepLoadConfig.load()
    """

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    cli: CliConfig = field(default_factory=CliConfig)

    @classmethod
    def load(cls) -> "PepLoadConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError, ValueError, TypeError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        for var, section, key in _ENV_VARS:
            if val := os.environ.get(var):
                if not _set_checked(getattr(config, section), key, val):
                    logger.warning("Invalid %s=%r, ignoring", var, val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/pepload/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "defaults": asdict(self.defaults),
            "cli": asdict(self.cli),
        }


# =============================================================================
# Config dict application
# =============================================================================


_ENV_VARS = (
    ("PEPLOAD_BUFFER_SIZE", "defaults", "buffer_size"),
    ("PEPLOAD_RAW_FORMAT", "defaults", "raw_format"),
    ("PEPLOAD_CLI_MODE", "cli", "mode"),
)


def _check_value(key: str, value: Any) -> Any:
    """Normalize a config value, raising ValueError if it's out of range."""
    if key == "buffer_size":
        if isinstance(value, bool):
            raise ValueError(value)
        size = int(value)
        if size <= 0:
            raise ValueError(value)
        return size
    if key == "raw_format":
        if not isinstance(value, str) or value.lower() not in RAW_FORMATS:
            raise ValueError(value)
        return value.lower()
    if key == "mode":
        if not isinstance(value, str) or value.lower() not in CLI_MODES:
            raise ValueError(value)
        return value.lower()
    return value


def _set_checked(section: Any, key: str, value: Any) -> bool:
    try:
        value = _check_value(key, value)
    except (TypeError, ValueError):
        return False
    setattr(section, key, value)
    return True


def _apply_dict(config: PepLoadConfig, data: dict) -> None:
    """Apply a dict of values onto a PepLoadConfig, skipping invalid ones."""
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    for name in ("defaults", "cli"):
        values = data.get(name)
        if not isinstance(values, dict):
            continue
        section = getattr(config, name)
        for k, v in values.items():
            if hasattr(section, k) and not _set_checked(section, k, v):
                logger.warning("Invalid config value %s.%s=%r, ignoring", name, k, v)


# =============================================================================
# Global config singleton
# =============================================================================

_config: PepLoadConfig | None = None


def get_config() -> PepLoadConfig:
    """Get the global PepLoadConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = PepLoadConfig.load()
    return _config


def configure(config: PepLoadConfig) -> None:
    """Set the global PepLoadConfig programmatically.

    Use this when pepload is used as a package:
        from pepload.config import configure, PepLoadConfig, DefaultsConfig
        configure(PepLoadConfig(defaults=DefaultsConfig(buffer_size=65536)))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
