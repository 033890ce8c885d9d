"""Directory snapshots as nested dicts, and the reverse.

The dict shape is the one used by filesystem fixtures in tests::

    {
        "README.md": "",                    # file
        "src": {"main.py": "print(1)\\n"},   # directory
        "latest": {"->": "src/main.py"},    # symlink
    }
"""

from __future__ import annotations

import os

from projkit.fs.abspath import AbsPath

SYMLINK_KEY = "->"


def snapshot(
    directory: AbsPath | str,
    max_levels: int = -1,
    with_contents_of: list[str] | None = None,
) -> dict:
    """Describe the contents of *directory* as a nested dict.

    Args:
        directory: Directory to describe.
        max_levels: How deep to descend. Directories beyond the limit are
            reported as ``{}``. -1 means no limit.
        with_contents_of: Basenames of files whose text should be included.
            Other files map to ``""``.

    Returns:
        Nested dict keyed by entry basename.
    """
    root = AbsPath(directory)
    wanted = set(with_contents_of or [])
    result: dict = {}

    for entry in root.dir_contents or []:
        if entry.is_symlink:
            result[entry.basename] = {SYMLINK_KEY: os.readlink(entry.abspath)}
        elif entry.is_dir:
            if max_levels == 0:
                result[entry.basename] = {}
            else:
                result[entry.basename] = snapshot(
                    entry, max_levels - 1 if max_levels > 0 else -1, with_contents_of,
                )
        elif entry.basename in wanted:
            result[entry.basename] = entry.contents_string
        else:
            result[entry.basename] = ""
    return result


def build(base: AbsPath | str, structure: dict) -> AbsPath:
    """Create the files, directories and symlinks described by *structure*."""
    root = AbsPath(base)
    root.mkdirs()
    for name, value in structure.items():
        target = root.add(name)
        if isinstance(value, dict):
            if set(value) == {SYMLINK_KEY}:
                target.parent.mkdirs()
                os.symlink(value[SYMLINK_KEY], target.abspath)
            else:
                build(target, value)
        elif isinstance(value, bytes):
            target.parent.mkdirs()
            with open(target.abspath, "wb") as f:
                f.write(value)
        else:
            target.save_str(str(value))
    return root
