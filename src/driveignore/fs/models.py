"""Data models for tree walking."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from stat import S_ISDIR, S_ISLNK


class WalkAction(str, Enum):
    SKIP_SUBTREE = "skip_subtree"


# Returned by a visitor to stop descent into the visited directory.
SKIP_SUBTREE = WalkAction.SKIP_SUBTREE


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """A single visited entry. Recreated for every visit."""

    path: str  # absolute
    rel_path: str  # relative to the walk root, OS separator
    stat: os.stat_result  # from lstat, symlinks are not followed

    @property
    def is_dir(self) -> bool:
        return S_ISDIR(self.stat.st_mode)

    @property
    def is_symlink(self) -> bool:
        return S_ISLNK(self.stat.st_mode)
