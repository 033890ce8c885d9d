"""Filesystem module: absolute paths and directory snapshots."""

from projkit.fs.abspath import AbsPath, notnull
from projkit.fs.tree import build, snapshot

__all__ = [
    "AbsPath",
    "notnull",
    "build",
    "snapshot",
]
