"""Resolve the global and local .driveignore files into one IgnoreSet."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Tuple

from driveignore.ignore.patterns import IgnoreSet, merged

DEFAULT_FILENAME = ".driveignore"
DEFAULT_GLOBAL_FILE = "~/.driveignore"


class IgnoreResolutionError(Exception):
    """Raised when no ignore file could be found and one is required."""


class IgnoreSource(str, Enum):
    GLOBAL = "global"
    LOCAL = "local"
    MERGED = "merged"
    NONE = "none"


def global_ignore_path(global_file: Optional[str] = None) -> Path:
    return Path(global_file or DEFAULT_GLOBAL_FILE).expanduser()


def local_ignore_path(source_root: Path, filename: str = DEFAULT_FILENAME) -> Path:
    return Path(source_root) / filename


def _load(path: Path) -> IgnoreSet:
    try:
        return IgnoreSet.from_file(path)
    except (OSError, ValueError) as exc:
        raise IgnoreResolutionError(f"Failed to load {path}: {exc}") from exc


def resolve_ignores(
    source_root: Path,
    *,
    merge: bool = False,
    global_file: Optional[str] = None,
    filename: str = DEFAULT_FILENAME,
    extra_patterns: Iterable[str] = (),
) -> Tuple[IgnoreSet, IgnoreSource]:
    """Load the ignore set for *source_root*.

    The local file wins over the global one unless *merge* is set, in which
    case both are used (global patterns first). *extra_patterns* are appended
    to whatever was loaded and never change the reported source.
    """
    global_path = global_ignore_path(global_file)
    local_path = local_ignore_path(source_root, filename)
    has_global = global_path.is_file()
    has_local = local_path.is_file()

    if merge and has_global and has_local:
        ignores = merged(_load(global_path), _load(local_path))
        source = IgnoreSource.MERGED
    elif has_local:
        ignores = _load(local_path)
        source = IgnoreSource.LOCAL
    elif has_global:
        ignores = _load(global_path)
        source = IgnoreSource.GLOBAL
    else:
        ignores = IgnoreSet.empty()
        source = IgnoreSource.NONE

    extra = list(extra_patterns)
    if extra:
        try:
            ignores = merged(ignores, IgnoreSet.from_lines(extra, source="config"))
        except ValueError as exc:
            raise IgnoreResolutionError(f"Invalid ignore pattern in config: {exc}") from exc

    return ignores, source


def require_ignores(
    source_root: Path,
    *,
    required: bool = True,
    **kwargs,
) -> Tuple[IgnoreSet, IgnoreSource]:
    """Like :func:`resolve_ignores`, but fail when nothing was found and *required*."""
    ignores, source = resolve_ignores(source_root, **kwargs)
    if source is IgnoreSource.NONE and required:
        raise IgnoreResolutionError("No local nor global .driveignore found")
    return ignores, source
