"""Depth-first directory walker with per-entry visitor callbacks."""

from __future__ import annotations

import errno
import os
import stat
from typing import Callable, Iterator, List, Optional, Tuple

from driveignore.fs.models import SKIP_SUBTREE, WalkAction, WalkEntry

Visitor = Callable[[WalkEntry], Optional[WalkAction]]


class WalkError(Exception):
    """Raised when the filesystem fails during a walk."""

    def __init__(self, path: str, cause: OSError) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.cause = cause
        self.partial: List[str] = []  # results drained before the failure


def _lstat(path: str) -> os.stat_result:
    try:
        return os.lstat(path)
    except OSError as exc:
        raise WalkError(path, exc) from exc


def _list_dir(path: str) -> List[str]:
    try:
        with os.scandir(path) as it:
            names = [entry.name for entry in it]
    except OSError as exc:
        raise WalkError(path, exc) from exc
    names.sort()
    return names


def _walk_dir(abs_root: str, visit: Visitor) -> None:
    # one (abs_dir, rel_dir, remaining names) frame per open directory
    stack: List[Tuple[str, str, Iterator[str]]] = [(abs_root, "", iter(_list_dir(abs_root)))]
    while stack:
        abs_dir, rel_dir, names = stack[-1]
        name = next(names, None)
        if name is None:
            stack.pop()
            continue
        abs_path = os.path.join(abs_dir, name)
        rel_path = os.path.join(rel_dir, name) if rel_dir else name
        entry = WalkEntry(path=abs_path, rel_path=rel_path, stat=_lstat(abs_path))

        action = visit(entry)
        if entry.is_dir and action is not SKIP_SUBTREE:
            stack.append((abs_path, rel_path, iter(_list_dir(abs_path))))


def walk(root: str, visit: Visitor, *, include_root: bool = False) -> None:
    """Walk *root* depth-first, pre-order, calling *visit* for every entry.

    Siblings are visited in lexical order. Symlinks are reported but never
    followed. *visit* may return ``SKIP_SUBTREE`` to prune a directory;
    any exception it raises stops the walk and propagates. Filesystem
    failures raise :class:`WalkError`.

    With *include_root* the root itself is visited first as ``"."``.
    """
    root = os.path.abspath(root)
    root_stat = _lstat(root)
    if not stat.S_ISDIR(root_stat.st_mode):
        raise WalkError(root, NotADirectoryError(errno.ENOTDIR, "Not a directory", root))

    if include_root:
        action = visit(WalkEntry(path=root, rel_path=".", stat=root_stat))
        if action is SKIP_SUBTREE:
            return

    _walk_dir(root, visit)
