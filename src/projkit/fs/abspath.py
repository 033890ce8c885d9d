"""Immutable absolute-path object.

An ``AbsPath`` wraps a normalized absolute path (or nothing at all) and offers
utility methods to navigate the filesystem, inspect entries and perform
operations on them. Navigation never mutates: ``add``/``parent`` return new
instances.
"""

from __future__ import annotations

import json
import os
import re
import stat as _stat
from typing import Any, Callable, Iterator

import json5
import yaml
from binaryornot.check import is_binary

_VALIDATIONS = ("exists", "is_dir", "is_file", "is_symlink", "is_binary")


def notnull(arg: Any, name: str | None = None) -> Any:
    """Return *arg*, raising ValueError if it is None."""
    if arg is None:
        exp = f" for {name}" if name else ""
        raise ValueError(f"unexpected value{exp}: {arg}")
    return arg


class AbsPath:
    """An absolute filesystem path, or the unset path.

    Args:
        source: absolute or relative path string, another AbsPath, or None.
            Relative strings are resolved against the process cwd.
    """

    __slots__ = ("_abspath",)

    def __init__(self, source: str | os.PathLike | AbsPath | None = None):
        if source is None:
            value = None
        elif isinstance(source, AbsPath):
            value = source._abspath
        else:
            raw = os.fspath(source)
            if not os.path.isabs(raw):
                raw = os.path.join(os.getcwd(), raw)
            value = os.path.normpath(raw)
        object.__setattr__(self, "_abspath", value)

    def __setattr__(self, name, value):
        raise AttributeError("AbsPath is immutable")

    # ── Factories ────────────────────────────────────────────────

    @classmethod
    def from_string_allowing_relative(
        cls,
        pathseg: str | None = None,
        basedir: str | None = None,
    ) -> AbsPath:
        """Create an AbsPath from a string.

        Args:
            pathseg: If absolute, *basedir* is ignored. If relative, it is
                joined to *basedir*. If empty, *basedir* itself is returned.
            basedir: Reference point for relative paths. Defaults to cwd.
        """
        if basedir is None:
            basedir = os.getcwd()
        if not pathseg:
            return cls(basedir)
        if os.path.isabs(pathseg):
            return cls(pathseg)
        return cls(os.path.join(basedir, pathseg))

    @classmethod
    def dir_hierarchy_of(cls, filepath: str) -> list[AbsPath]:
        return cls(filepath).dir_hierarchy

    # ── Basic protocol ───────────────────────────────────────────

    def __str__(self) -> str:
        return self._abspath or ""

    def __repr__(self) -> str:
        return f"AbsPath({self._abspath!r})"

    def __fspath__(self) -> str:
        return self.abspath

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbsPath):
            return NotImplemented
        return self._abspath == other._abspath

    def __hash__(self) -> int:
        return hash(self._abspath)

    # ── Path functions ───────────────────────────────────────────

    @property
    def abspath(self) -> str:
        if self._abspath is None:
            raise ValueError("abspath is not set")
        return self._abspath

    @property
    def is_set(self) -> bool:
        return self._abspath is not None

    @property
    def basename(self) -> str:
        if self._abspath is None:
            return ""
        return os.path.basename(self._abspath)

    def add(self, filepath: str | os.PathLike) -> AbsPath:
        """Return this path with an additional segment.

        A leading separator on *filepath* does not reset the path: adding
        ``/b`` to ``/a`` yields ``/a/b``.
        """
        if self._abspath is None:
            return self
        seg = os.fspath(filepath).lstrip(os.sep)
        return AbsPath(os.path.join(self._abspath, seg))

    @property
    def parent(self) -> AbsPath:
        """The containing directory. The root's parent is the root."""
        if self._abspath is None:
            return self
        return AbsPath(os.path.dirname(self._abspath))

    def parents(self, n: int) -> AbsPath:
        """The directory *n* levels up (``parents(1) == parent``)."""
        p = self
        for _ in range(n):
            p = p.parent
        return p

    def relative_from(
        self,
        other: AbsPath,
        must_be_contained_in_other: bool = False,
    ) -> str | None:
        """Relative path leading from *other* to this path.

        Returns None if either path is unset, or if containment is required
        and this path is not inside *other*.
        """
        if self._abspath is None or other._abspath is None:
            return None
        if must_be_contained_in_other:
            if self._abspath != other._abspath and not self._abspath.startswith(
                other._abspath.rstrip(os.sep) + os.sep
            ):
                return None
        result = os.path.relpath(self._abspath, other._abspath)
        if result == "." and not self.is_dir:
            return ""
        return result

    # ── Recognition ──────────────────────────────────────────────

    def _lstat(self) -> os.stat_result | None:
        if self._abspath is None:
            return None
        try:
            return os.lstat(self._abspath)
        except OSError:
            return None

    @property
    def is_root(self) -> bool:
        if self._abspath is None:
            return False
        return os.path.dirname(self._abspath) == self._abspath

    @property
    def exists(self) -> bool:
        return self._lstat() is not None

    @property
    def is_file(self) -> bool:
        st = self._lstat()
        return st is not None and _stat.S_ISREG(st.st_mode)

    @property
    def is_dir(self) -> bool:
        st = self._lstat()
        return st is not None and _stat.S_ISDIR(st.st_mode)

    @property
    def is_symlink(self) -> bool:
        st = self._lstat()
        return st is not None and _stat.S_ISLNK(st.st_mode)

    @property
    def is_empty_dir(self) -> bool:
        if not self.is_dir:
            return False
        try:
            return not os.listdir(self._abspath)
        except OSError:
            return False

    @property
    def is_binary_file(self) -> bool:
        if not self.is_file:
            return False
        return is_binary(self._abspath)

    def validate(self, kind: str) -> AbsPath:
        """Raise ValueError unless the path satisfies *kind*.

        Args:
            kind: one of exists, is_dir, is_file, is_symlink, is_binary.

        Returns:
            self, so calls can be chained.
        """
        if kind not in _VALIDATIONS:
            raise ValueError(f"unhandled validation: {kind}")
        if not self.exists:
            if kind == "is_dir":
                raise ValueError(f"{self._abspath}/ does not exist")
            raise ValueError(f"{self._abspath} does not exist")

        if kind == "is_dir" and not self.is_dir:
            raise ValueError(f"{self._abspath}/ is not a directory")
        if kind == "is_file" and not self.is_file:
            raise ValueError(f"{self._abspath} is not a file")
        if kind == "is_symlink" and not self.is_symlink:
            raise ValueError(f"{self._abspath} is not a symlink")
        if kind == "is_binary" and not self.is_binary_file:
            raise ValueError(f"{self._abspath} is not a binary file")
        return self

    # ── Directory contents and search ────────────────────────────

    def contains_file(self, filename: str) -> bool:
        if self._abspath is None:
            return False
        return self.add(filename).is_file

    def contains_dir(self, filename: str) -> bool:
        if self._abspath is None:
            return False
        return self.add(filename).is_dir

    def find_upwards(self, filename: str, can_be_dir: bool = False) -> AbsPath:
        """Scan upwards from this path for an entry called *filename*.

        Args:
            filename: the entry to search for.
            can_be_dir: if True, directories match as well as regular files.

        Returns:
            The path of the nearest matching entry, or an unset AbsPath.
        """
        for directory in self.dir_hierarchy:
            if directory.contains_file(filename):
                return directory.add(filename)
            if can_be_dir and directory.contains_dir(filename):
                return directory.add(filename)
        return AbsPath(None)

    @property
    def dir_hierarchy(self) -> list[AbsPath]:
        """This path followed by each containing directory, ending at root."""
        if self._abspath is None:
            return []
        result = [self]
        current = self
        while not current.is_root:
            current = current.parent
            result.append(current)
        return result

    @property
    def dir_contents(self) -> list[AbsPath] | None:
        """Sorted entries of the directory, or None if not a directory."""
        if not self.is_dir:
            return None
        return [self.add(entry) for entry in sorted(os.listdir(self._abspath))]

    def foreach_entry_in_dir(
        self,
        fn: Callable[[AbsPath, str | None], Any],
        traverse: str = "both",
    ) -> bool:
        """Walk the tree below this directory, calling *fn* for each entry.

        Directories are reported with direction ``"down"`` before their
        contents and ``"up"`` after them (``traverse`` selects which of the
        two are emitted). Everything else is reported once with ``None``.
        A truthy return from *fn* aborts the whole traversal.

        Returns:
            True if the traversal was aborted (or this is not a directory).
        """
        entries = self.dir_contents
        if entries is None:
            return True

        for entry in entries:
            if entry.is_dir:
                if traverse in ("down", "both") and fn(entry, "down"):
                    return True
                if entry.foreach_entry_in_dir(fn, traverse):
                    return True
                if traverse in ("up", "both") and fn(entry, "up"):
                    return True
            elif fn(entry, None):
                return True
        return False

    def walk(self) -> Iterator[AbsPath]:
        """Yield every entry below this directory, parents before children."""
        for entry in self.dir_contents or []:
            yield entry
            if entry.is_dir:
                yield from entry.walk()

    # ── Symbolic links ───────────────────────────────────────────

    @property
    def symlink_target(self) -> AbsPath:
        if not self.is_symlink:
            return self
        target = os.readlink(self._abspath)
        if not os.path.isabs(target):
            target = os.path.join(os.path.dirname(self._abspath), target)
        return AbsPath(target)

    @property
    def realpath(self) -> AbsPath:
        if self._abspath is None:
            return self
        return AbsPath(os.path.realpath(self._abspath))

    # ── File contents ────────────────────────────────────────────

    @property
    def contents_lines(self) -> list[str]:
        return self.contents_string.split("\n")

    @property
    def contents_string(self) -> str:
        if not self.is_file:
            return ""
        with open(self._abspath, encoding="utf-8", errors="replace") as f:
            return f.read()

    @property
    def contents_bytes(self) -> bytes:
        if not self.is_file:
            return b""
        with open(self._abspath, "rb") as f:
            return f.read()

    @property
    def contents_from_json(self) -> Any:
        """Parsed JSON contents, or None if not a readable JSON file."""
        if not self.is_file:
            return None
        try:
            return json.loads(self.contents_bytes.decode("utf-8"))
        except (ValueError, UnicodeDecodeError):
            return None

    @property
    def contents_from_jsonc(self) -> Any:
        """Parsed contents of a JSON file that may contain comments, or None."""
        if not self.is_file:
            return None
        try:
            return json5.loads(self.contents_bytes.decode("utf-8"))
        except (ValueError, UnicodeDecodeError):
            return None

    @property
    def contents_from_yaml(self) -> Any:
        """Parsed YAML contents, or None if not a readable YAML file."""
        if not self.is_file:
            return None
        try:
            return yaml.safe_load(self.contents_string)
        except yaml.YAMLError:
            return None

    def save_str(self, contents: str) -> None:
        """Write *contents* to the file, creating parent directories."""
        if self._abspath is None:
            raise ValueError("can't save - abspath is not set")
        try:
            self.parent.mkdirs()
        except OSError as e:
            raise OSError(f"can't save {self} - {e}") from e
        with open(self._abspath, "w", encoding="utf-8") as f:
            f.write(contents)

    # ── Modifying the filesystem ─────────────────────────────────

    def rename_to(self, new_name: str | os.PathLike) -> None:
        if not self.exists:
            return
        os.rename(self._abspath, os.fspath(new_name))

    def rm_file(self) -> None:
        if self._abspath is None:
            raise ValueError("rm_file - path is not set")
        if not self.is_file:
            raise ValueError(f"rm_file - {self} is not a file")
        os.unlink(self._abspath)

    unlink_file = rm_file

    def mkdirs(self) -> None:
        """Create this directory and any missing ancestors."""
        if self._abspath is None:
            raise ValueError("can't mkdirs for unset abspath")
        if self.exists or self.is_root:
            return

        parent = self.parent
        if parent.exists and not parent.is_dir and not parent.is_symlink:
            raise NotADirectoryError(
                f"{parent} exists and is not a directory or symlink"
            )
        parent.mkdirs()

        os.mkdir(parent.realpath.add(self.basename).abspath)

    def rmrfdir(self, must_match: str | re.Pattern, remove_self: bool = False) -> None:
        """Recursively delete the directory contents.

        Every path below this directory (and the directory itself when
        *remove_self* is set) must match *must_match*. All paths are checked
        before anything is removed.

        Raises:
            ValueError: if any visited path does not match.
        """
        if not self.is_dir:
            return
        pattern = re.compile(must_match) if isinstance(must_match, str) else must_match

        def _check(p: AbsPath) -> None:
            if not pattern.search(p.abspath):
                raise ValueError(
                    f"{p} does not match {pattern.pattern} - aborting delete operation"
                )

        if remove_self:
            _check(self)
        self.foreach_entry_in_dir(lambda p, direction: _check(p), traverse="down")

        def _remove(p: AbsPath, direction: str | None) -> None:
            if direction == "up":
                os.rmdir(p.abspath)
            elif direction is None:
                os.unlink(p.abspath)

        self.foreach_entry_in_dir(_remove)
        if remove_self:
            os.rmdir(self._abspath)

    # ── File version naming ──────────────────────────────────────
    #
    # A numeric suffix names a version: "myfile.txt.3" is version 3 of
    # "myfile.txt". Used to keep a backup of a file before modifying it.

    @property
    def existing_versions(self) -> list[int] | None:
        """Sorted version numbers N for which ``<path>.N`` exists."""
        if self._abspath is None:
            return None
        siblings = self.parent.dir_contents
        if siblings is None:
            return None

        regex = re.compile(re.escape(self.basename) + r"\.([0-9]+)")
        versions = []
        for sibling in siblings:
            m = regex.fullmatch(sibling.basename)
            if m:
                versions.append(int(m.group(1)))
        return sorted(versions)

    @property
    def max_ver(self) -> int | None:
        versions = self.existing_versions
        if not versions:
            return None
        return versions[-1]

    def rename_to_next_ver(self) -> AbsPath:
        """Rename ``<path>`` to ``<path>.<n+1>``.

        *n* is the largest existing version (see ``existing_versions``). With
        no existing versions the file becomes ``<path>.1``.

        Returns:
            The new path.
        """
        current = self.max_ver
        newname = f"{self.abspath}.{1 if current is None else current + 1}"
        self.rename_to(newname)
        return AbsPath(newname)
