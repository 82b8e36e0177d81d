"""Diff engine: concurrent source/target correspondence checks."""

from driveignore.diff.engine import DiffStreams, collect, diff, run_diff
from driveignore.diff.identity import IdentityMode, same_identity
from driveignore.diff.models import ArgumentError, DiffOptions, DiffReport, check_roots
from driveignore.diff.streams import ResultStream, StreamConsumedError

__all__ = [
    "ArgumentError",
    "DiffOptions",
    "DiffReport",
    "DiffStreams",
    "IdentityMode",
    "ResultStream",
    "StreamConsumedError",
    "check_roots",
    "collect",
    "diff",
    "run_diff",
    "same_identity",
]
