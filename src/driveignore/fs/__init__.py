"""Filesystem layer: tree walker and entry models."""

from driveignore.fs.models import SKIP_SUBTREE, WalkAction, WalkEntry
from driveignore.fs.walker import WalkError, walk

__all__ = [
    "SKIP_SUBTREE",
    "WalkAction",
    "WalkEntry",
    "WalkError",
    "walk",
]
