"""Shared test fixtures: temp source/target trees and an isolated home."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest

_ENV_VARS = (
    "DRIVEIGNORE_IDENTITY",
    "DRIVEIGNORE_FORMAT",
    "DRIVEIGNORE_MERGE_IGNORES",
    "DRIVEIGNORE_GLOBAL_FILE",
    "DRIVEIGNORE_PATTERNS",
)


def build_tree(root: Path, layout: Dict[str, str]) -> Path:
    """Create files and directories under *root*.

    Keys ending in ``/`` are directories; other keys are files whose value is
    the file content.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in layout.items():
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
    return root


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME at an empty directory and clear DRIVEIGNORE_* env vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, Dict[str, str]], Path]:
    """Factory: ``make_tree("src", {"a.txt": "x", "sub/": ""})``."""

    def _make(name: str, layout: Dict[str, str]) -> Path:
        return build_tree(tmp_path / name, layout)

    return _make


@pytest.fixture
def source(make_tree) -> Path:
    """An empty source tree."""
    return make_tree("source", {})


@pytest.fixture
def target(make_tree) -> Path:
    """An empty target (sync folder) tree."""
    return make_tree("target", {})
