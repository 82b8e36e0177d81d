"""Correspondence engine: two concurrent walks, one per direction.

The *missing* walk visits the source tree, honoring the ignore set, and
reports entries with no counterpart in the target. The *stale* walk visits
the target tree unconditionally and reports entries with no counterpart in
the source. Ignore patterns describe what the source is expected to
contain, so they are never applied to the target.

Directories correspond whenever anything exists at the mirrored path;
files must also pass the identity check.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from driveignore.diff.identity import IdentityMode, same_identity
from driveignore.diff.models import DiffOptions, DiffReport
from driveignore.diff.streams import ResultStream
from driveignore.fs.models import SKIP_SUBTREE, WalkAction, WalkEntry
from driveignore.fs.walker import WalkError, walk
from driveignore.ignore.loader import IgnoreSource
from driveignore.ignore.patterns import IgnoreSet


@dataclass
class DiffStreams:
    """The two result streams of a running diff."""

    missing: ResultStream
    stale: ResultStream

    def errors(self) -> Tuple[Optional[BaseException], Optional[BaseException]]:
        """Wait for both walks and return ``(missing_error, stale_error)``."""
        return self.missing.wait(), self.stale.wait()


def _mirror_stat(path: str, *, follow_symlinks: bool = True) -> Optional[os.stat_result]:
    """Stat the mirrored path. None means nothing is there."""
    try:
        return os.stat(path, follow_symlinks=follow_symlinks)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise WalkError(path, exc) from exc


def _corresponds(entry: WalkEntry, other_root: str, identity: IdentityMode) -> bool:
    # size mode compares a symlink with the link on the other side, not its target
    follow = not (entry.is_symlink and identity is IdentityMode.SIZE)
    other = _mirror_stat(os.path.join(other_root, entry.rel_path), follow_symlinks=follow)
    if other is None:
        return False
    if entry.is_dir:
        return True
    return same_identity(entry.stat, other, identity)


def _missing_walk(options: DiffOptions, out: ResultStream) -> None:
    ignores: IgnoreSet = options.ignores

    def visit(entry: WalkEntry) -> Optional[WalkAction]:
        if entry.is_dir and ignores.match(entry.rel_path, True):
            return SKIP_SUBTREE
        if not entry.is_dir and ignores.match(entry.rel_path, False):
            return None
        if not _corresponds(entry, options.target_root, options.identity):
            out.emit(entry.rel_path)
        return None

    walk(options.source_root, visit)


def _stale_walk(options: DiffOptions, out: ResultStream) -> None:
    def visit(entry: WalkEntry) -> Optional[WalkAction]:
        if not _corresponds(entry, options.source_root, options.identity):
            out.emit(entry.rel_path)
        return None

    walk(options.target_root, visit)


def diff(options: DiffOptions) -> DiffStreams:
    """Start both walks and return their streams immediately."""
    missing = ResultStream("missing", maxsize=options.queue_size)
    stale = ResultStream("stale", maxsize=options.queue_size)
    missing.start(lambda out: _missing_walk(options, out))
    stale.start(lambda out: _stale_walk(options, out))
    return DiffStreams(missing=missing, stale=stale)


def _drain(stream: ResultStream) -> list[str]:
    paths = list(stream)
    err = stream.wait()
    if err is not None:
        if isinstance(err, WalkError):
            err.partial = paths
        raise err
    return paths


def collect(streams: DiffStreams) -> Tuple[list[str], list[str]]:
    """Drain *missing* fully and check its error, then do the same for *stale*.

    Raises the first walk error encountered; paths drained from the failing
    stream are kept on ``WalkError.partial``.
    """
    missing = _drain(streams.missing)
    stale = _drain(streams.stale)
    return missing, stale


def run_diff(
    options: DiffOptions,
    *,
    ignore_source: IgnoreSource = IgnoreSource.NONE,
) -> DiffReport:
    """Run a complete diff and return a DiffReport."""
    start = time.perf_counter()
    missing, stale = collect(diff(options))
    elapsed = (time.perf_counter() - start) * 1000

    return DiffReport(
        source=options.source_root,
        target=options.target_root,
        missing=missing,
        stale=stale,
        ignore_source=ignore_source,
        duration_ms=round(elapsed, 2),
    )
