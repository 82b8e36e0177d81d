"""Ignore patterns and .driveignore resolution."""

from driveignore.ignore.loader import (
    IgnoreResolutionError,
    IgnoreSource,
    require_ignores,
    resolve_ignores,
)
from driveignore.ignore.patterns import IgnorePattern, IgnoreSet, merged, parse_line

__all__ = [
    "IgnorePattern",
    "IgnoreResolutionError",
    "IgnoreSet",
    "IgnoreSource",
    "merged",
    "parse_line",
    "require_ignores",
    "resolve_ignores",
]
