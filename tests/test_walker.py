"""Tests for the depth-first tree walker."""

import os
from pathlib import Path

import pytest

from driveignore.fs.models import SKIP_SUBTREE
from driveignore.fs.walker import WalkError, walk


def _collect(root, **kwargs):
    seen = []
    walk(str(root), lambda e: seen.append(e.rel_path), **kwargs)
    return seen


def _p(*parts):
    return os.path.join(*parts)


class TestTraversal:
    def test_preorder_sorted(self, make_tree):
        root = make_tree("t", {
            "b.txt": "b",
            "a/": "",
            "a/z.txt": "z",
            "a/m/": "",
            "a/m/n.txt": "n",
            "c/": "",
        })
        assert _collect(root) == [
            "a",
            _p("a", "m"),
            _p("a", "m", "n.txt"),
            _p("a", "z.txt"),
            "b.txt",
            "c",
        ]

    def test_entry_fields(self, make_tree):
        root = make_tree("t", {"d/": "", "d/f.txt": "hello"})
        entries = []
        walk(str(root), entries.append)
        d, f = entries
        assert d.is_dir is True
        assert f.is_dir is False
        assert f.path == str(root / "d" / "f.txt")
        assert f.rel_path == _p("d", "f.txt")
        assert f.stat.st_size == 5
        assert f.is_symlink is False

    def test_empty_root(self, make_tree):
        assert _collect(make_tree("t", {})) == []

    def test_include_root(self, make_tree):
        root = make_tree("t", {"a.txt": "a"})
        assert _collect(root, include_root=True) == [".", "a.txt"]

    def test_include_root_skip(self, make_tree):
        root = make_tree("t", {"a.txt": "a"})
        seen = []

        def visit(entry):
            seen.append(entry.rel_path)
            return SKIP_SUBTREE

        walk(str(root), visit, include_root=True)
        assert seen == ["."]

    def test_very_deep_tree(self, tmp_path: Path):
        root = tmp_path / "deep"
        root.mkdir()
        current = str(root)
        for _ in range(1100):
            current = os.path.join(current, "d")
            os.mkdir(current)
        seen = _collect(root)
        assert len(seen) == 1100
        assert seen[0] == "d"
        assert seen[-1] == os.path.join(*["d"] * 1100)


class TestSkipSubtree:
    def test_skipped_dir_not_descended(self, make_tree):
        root = make_tree("t", {
            "keep/": "",
            "keep/a.txt": "a",
            "skip/": "",
            "skip/inner.txt": "x",
            "skip/deeper/": "",
            "skip/deeper/more.txt": "y",
            "z.txt": "z",
        })
        seen = []

        def visit(entry):
            seen.append(entry.rel_path)
            if entry.rel_path == "skip":
                return SKIP_SUBTREE
            return None

        walk(str(root), visit)
        assert seen == ["keep", _p("keep", "a.txt"), "skip", "z.txt"]

    def test_skip_on_file_is_harmless(self, make_tree):
        root = make_tree("t", {"a.txt": "a", "b.txt": "b"})
        seen = []

        def visit(entry):
            seen.append(entry.rel_path)
            return SKIP_SUBTREE

        walk(str(root), visit)
        assert seen == ["a.txt", "b.txt"]


class TestErrors:
    def test_visitor_exception_halts(self, make_tree):
        root = make_tree("t", {"a.txt": "", "b.txt": "", "c.txt": ""})
        seen = []

        def visit(entry):
            seen.append(entry.rel_path)
            if entry.rel_path == "b.txt":
                raise ValueError("stop here")

        with pytest.raises(ValueError, match="stop here"):
            walk(str(root), visit)
        assert seen == ["a.txt", "b.txt"]

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(WalkError) as exc_info:
            walk(str(tmp_path / "nope"), lambda e: None)
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_root_is_file(self, tmp_path: Path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(WalkError) as exc_info:
            walk(str(f), lambda e: None)
        assert isinstance(exc_info.value.cause, NotADirectoryError)

    def test_unreadable_directory(self, make_tree, monkeypatch):
        root = make_tree("t", {"a.txt": "", "locked/": "", "locked/x.txt": ""})
        real_scandir = os.scandir

        def fake_scandir(path):
            if str(path).endswith("locked"):
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr("driveignore.fs.walker.os.scandir", fake_scandir)
        seen = []
        with pytest.raises(WalkError) as exc_info:
            walk(str(root), lambda e: seen.append(e.rel_path))
        assert exc_info.value.path.endswith("locked")
        assert isinstance(exc_info.value.cause, PermissionError)
        assert seen == ["a.txt", "locked"]


class TestSymlinks:
    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlink support")
    def test_symlinked_dir_not_followed(self, make_tree):
        root = make_tree("t", {"real/": "", "real/f.txt": "f"})
        try:
            os.symlink(root / "real", root / "link", target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")
        entries = []
        walk(str(root), entries.append)
        assert [e.rel_path for e in entries] == ["link", "real", _p("real", "f.txt")]
        assert entries[0].is_dir is False
        assert entries[0].is_symlink is True
