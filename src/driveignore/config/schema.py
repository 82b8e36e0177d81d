"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

Identity = Literal["inode", "size", "exists"]
OutputFormat = Literal["terminal", "json"]

IDENTITY_CHOICES = ("inode", "size", "exists")
FORMAT_CHOICES = ("terminal", "json")


@dataclass
class DiffConfig:
    identity: Identity = "inode"  # how two files are judged the same
    merge_ignores: bool = False  # merge global and local .driveignore
    require_ignore_file: bool = True  # fail when no .driveignore is found
    queue_size: int = 0  # per-stream buffer; 0 = unbounded


@dataclass
class IgnoreConfig:
    filename: str = ".driveignore"
    global_file: str = "~/.driveignore"
    patterns: List[str] = field(default_factory=list)  # appended after file patterns


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = False


@dataclass
class DriveIgnoreConfig:
    version: str = "1.0"
    diff: DiffConfig = field(default_factory=DiffConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
