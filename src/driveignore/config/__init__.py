"""Configuration loading, schema, and defaults."""

from driveignore.config.loader import ConfigError, load_config
from driveignore.config.schema import DriveIgnoreConfig

__all__ = [
    "ConfigError",
    "DriveIgnoreConfig",
    "load_config",
]
