"""Diff options and report models."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from driveignore.diff.identity import IdentityMode
from driveignore.ignore.loader import IgnoreSource
from driveignore.ignore.patterns import IgnoreSet


class ArgumentError(Exception):
    """Raised when the diff roots are unusable. Detected before any walk starts."""


@dataclass(frozen=True)
class DiffOptions:
    """Everything a diff run needs, resolved up front."""

    source_root: str
    target_root: str
    ignores: IgnoreSet = field(default_factory=IgnoreSet.empty)
    identity: IdentityMode = IdentityMode.INODE
    queue_size: int = 0  # 0 = unbounded


@dataclass
class DiffReport:
    """Complete result of a diff run."""

    source: str
    target: str
    missing: List[str] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)
    ignore_source: IgnoreSource = IgnoreSource.NONE
    duration_ms: float = 0.0

    @property
    def total(self) -> int:
        return len(self.missing) + len(self.stale)

    @property
    def clean(self) -> bool:
        return self.total == 0


def check_roots(source_root: str, target_root: str) -> None:
    """Validate both roots. Raises ArgumentError."""
    if not os.path.exists(target_root):
        raise ArgumentError("Passed path doesnt exist")
    if not os.path.isdir(target_root):
        raise ArgumentError("Passed path isnt a directory")
    if not os.path.exists(source_root):
        raise ArgumentError(f"Input directory doesnt exist: {source_root}")
    if not os.path.isdir(source_root):
        raise ArgumentError(f"Input path isnt a directory: {source_root}")
