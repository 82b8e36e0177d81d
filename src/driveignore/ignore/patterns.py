"""Ignore patterns: gitignore-style rules parsed from .driveignore files.

Pattern format (same as .gitignore):
  - One glob per line; blank lines and lines starting with ``#`` are skipped.
  - ``\\#`` and ``\\!`` escape a leading ``#`` or ``!``.
  - A trailing ``/`` restricts the pattern to directories.
  - A leading ``!`` re-includes paths excluded by an earlier pattern.
  - A pattern containing a ``/`` (other than a trailing one) is anchored to
    the source root; otherwise it matches at any depth.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from pathspec import GitIgnoreSpec


@dataclass(frozen=True)
class IgnorePattern:
    """A single parsed ignore rule."""

    pattern: str
    dir_only: bool = False
    negated: bool = False
    anchored: bool = False
    source: Optional[str] = None  # file the rule was read from


def _strip_trailing_spaces(line: str) -> str:
    # "foo\ " keeps its escaped trailing space
    stripped = line.rstrip(" \t")
    if stripped.endswith("\\") and len(stripped) < len(line):
        return stripped + " "
    return stripped


def parse_line(line: str, source: Optional[str] = None) -> Optional[IgnorePattern]:
    """Parse one line of an ignore file. Returns None for blanks and comments."""
    line = _strip_trailing_spaces(line.rstrip("\r\n"))
    if not line or line.startswith("#"):
        return None

    body = line
    negated = False
    if body.startswith("!"):
        negated = True
        body = body[1:]
    elif body.startswith("\\#") or body.startswith("\\!"):
        body = body[1:]

    dir_only = body.endswith("/")
    core = body.rstrip("/")
    if not core:
        return None

    return IgnorePattern(
        pattern=line,
        dir_only=dir_only,
        negated=negated,
        anchored="/" in core,
        source=source,
    )


class IgnoreSet:
    """Ordered, immutable collection of ignore patterns.

    Usage::

        ignores = IgnoreSet.from_lines(["*.tmp", "build/"])
        ignores.match("src/a.tmp", False)   # True
        ignores.match("build", True)        # True
        ignores.match("build", False)       # False, directory-only rule
    """

    __slots__ = ("_patterns", "_spec")

    def __init__(self, patterns: Iterable[IgnorePattern] = ()) -> None:
        self._patterns: Tuple[IgnorePattern, ...] = tuple(patterns)
        self._spec = GitIgnoreSpec.from_lines([p.pattern for p in self._patterns])

    @classmethod
    def empty(cls) -> "IgnoreSet":
        return cls()

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Optional[str] = None) -> "IgnoreSet":
        parsed = (parse_line(line, source) for line in lines)
        return cls(p for p in parsed if p is not None)

    @classmethod
    def from_file(cls, path: Path) -> "IgnoreSet":
        """Load an ignore file. Raises OSError if it cannot be read."""
        with open(path, encoding="utf-8") as f:
            return cls.from_lines(f, source=str(path))

    @property
    def patterns(self) -> Tuple[IgnorePattern, ...]:
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __repr__(self) -> str:
        return f"IgnoreSet({[p.pattern for p in self._patterns]!r})"

    def match(self, path: str, is_dir: bool) -> bool:
        """Return True if *path* (relative to the source root) is excluded."""
        if not self._patterns:
            return False
        rel = path.replace(os.sep, "/").strip("/")
        if not rel or rel == ".":
            return False
        if is_dir:
            rel += "/"
        return self._spec.match_file(rel)


def merged(*sets: IgnoreSet) -> IgnoreSet:
    """Concatenate ignore sets; earlier sets' patterns come first."""
    return IgnoreSet(p for s in sets for p in s.patterns)
