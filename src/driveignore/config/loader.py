"""Load and merge configuration from .driveignore.toml and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from driveignore.config.schema import (
    FORMAT_CHOICES,
    IDENTITY_CHOICES,
    DiffConfig,
    DriveIgnoreConfig,
    IgnoreConfig,
    OutputConfig,
)

CONFIG_FILENAME = ".driveignore.toml"

_TRUTHY = ("1", "true", "yes")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(source_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = Path(source_root) / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: DriveIgnoreConfig) -> None:
    if cfg.diff.identity not in IDENTITY_CHOICES:
        raise ConfigError(
            f"Invalid diff.identity {cfg.diff.identity!r}; expected one of {', '.join(IDENTITY_CHOICES)}"
        )
    if cfg.output.format not in FORMAT_CHOICES:
        raise ConfigError(
            f"Invalid output.format {cfg.output.format!r}; expected one of {', '.join(FORMAT_CHOICES)}"
        )
    queue_size = cfg.diff.queue_size
    if isinstance(queue_size, bool) or not isinstance(queue_size, int) or queue_size < 0:
        raise ConfigError("diff.queue_size must be a non-negative integer")
    patterns = cfg.ignore.patterns
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigError("ignore.patterns must be a list of strings")
    for key, value in (
        ("diff.merge_ignores", cfg.diff.merge_ignores),
        ("diff.require_ignore_file", cfg.diff.require_ignore_file),
        ("output.show_summary", cfg.output.show_summary),
    ):
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false, got {value!r}")
    for key, value in (("ignore.filename", cfg.ignore.filename), ("ignore.global_file", cfg.ignore.global_file)):
        if not isinstance(value, str):
            raise ConfigError(f"{key} must be a string, got {value!r}")


def _merge_env_overrides(cfg: DriveIgnoreConfig) -> None:
    """Apply DRIVEIGNORE_* environment variable overrides."""
    if val := os.environ.get("DRIVEIGNORE_IDENTITY"):
        if val in IDENTITY_CHOICES:
            cfg.diff.identity = val  # type: ignore[assignment]
    if val := os.environ.get("DRIVEIGNORE_FORMAT"):
        if val in FORMAT_CHOICES:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("DRIVEIGNORE_MERGE_IGNORES"):
        cfg.diff.merge_ignores = val.lower() in _TRUTHY
    if val := os.environ.get("DRIVEIGNORE_GLOBAL_FILE"):
        cfg.ignore.global_file = val
    if val := os.environ.get("DRIVEIGNORE_PATTERNS"):
        cfg.ignore.patterns.extend(p.strip() for p in val.split(os.pathsep) if p.strip())


def load_config(
    source_root: Path,
    config_override: Optional[str] = None,
) -> DriveIgnoreConfig:
    """Load, validate, and return a DriveIgnoreConfig."""
    config_path = find_config_file(source_root, config_override)

    if config_path is None:
        cfg = DriveIgnoreConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = DriveIgnoreConfig(
                version=str(raw.get("version", "1.0")),
                diff=_build_section(raw, DiffConfig, "diff"),
                ignore=_build_section(raw, IgnoreConfig, "ignore"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
