"""File identity comparison between a tree entry and its mirrored path."""

from __future__ import annotations

import os
import stat
from enum import Enum


class IdentityMode(str, Enum):
    INODE = "inode"  # same underlying file (device + inode)
    SIZE = "size"  # same file type and byte size
    EXISTS = "exists"  # anything at the mirrored path


def same_identity(a: os.stat_result, b: os.stat_result, mode: IdentityMode) -> bool:
    """Return True if *a* and *b* count as the same file under *mode*."""
    if mode is IdentityMode.INODE:
        return os.path.samestat(a, b)
    if mode is IdentityMode.SIZE:
        return stat.S_IFMT(a.st_mode) == stat.S_IFMT(b.st_mode) and a.st_size == b.st_size
    return True
