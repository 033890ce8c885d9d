"""Git wrapper errors.

A single exception type tagged with a kind, so callers can branch on
``err.kind`` instead of on the exception class.
"""

from __future__ import annotations

from enum import Enum


class GitErrorKind(str, Enum):
    NOT_CONNECTED = "NotConnected"  # command issued before project_dir was set
    INVALID_PATH = "InvalidPath"  # project_dir is not an existing directory
    ADD_FAILED = "AddFailed"
    CHECK_IGNORE_FAILED = "CheckIgnoreFailed"
    GENERIC = "Generic"  # git exited with a status the caller did not allow


class GitError(Exception):
    """A failed git operation.

    Args:
        kind: What went wrong.
        message: Human-readable description.
        returncode: Exit status of the git process, when one ran.
        stdout: Captured standard output, decoded.
        stderr: Captured standard error, decoded.
        cmd: The argument vector that was executed.
    """

    def __init__(
        self,
        kind: GitErrorKind,
        message: str,
        *,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        cmd: list[str] | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.cmd = cmd

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"GitError({self.kind.value}, {self.message!r})"
