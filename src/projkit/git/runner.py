"""Low-level git invocation and output parsing."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from projkit.config import color_enabled, git_executable
from projkit.git.errors import GitError, GitErrorKind

logger = logging.getLogger(__name__)

_ANSI = {
    "black": "\033[30m",
    "red": "\033[31m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
    "dim": "\033[2m",
}
_RESET = "\033[0m"


def style(text: str, color: str) -> str:
    """Wrap *text* in an ANSI color unless colors are disabled."""
    if not color_enabled() or not text:
        return text
    return f"{_ANSI[color]}{text}{_RESET}"


def to_lines(output: bytes | str | list[str]) -> list[str]:
    """Split git output into non-empty lines.

    Lists are assumed to be already split and only have empties removed.
    """
    if isinstance(output, bytes):
        lines = output.decode("utf-8", errors="replace").split("\n")
    elif isinstance(output, list):
        lines = output
    else:
        lines = output.split("\n")
    return [line for line in lines if len(line) > 0]


def run_git(
    args: list[str],
    cwd: Path | str,
    allowed_statuses: tuple[int, ...] | list[int] = (),
    executable: str | None = None,
) -> subprocess.CompletedProcess:
    """Run a git command in *cwd* and return the completed process.

    Output is captured as bytes. A non-zero exit is tolerated only when the
    status appears in *allowed_statuses*.

    Raises:
        GitError: (GENERIC) if git exits with a disallowed status or cannot
            be started.
    """
    cmd = [executable or git_executable()] + list(args)
    logger.debug("running %s in %s", cmd, cwd)
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True)
    except FileNotFoundError as e:
        raise GitError(
            GitErrorKind.GENERIC, f"git executable not found: {cmd[0]}", cmd=cmd,
        ) from e

    if result.returncode == 0 or result.returncode in allowed_statuses:
        return result

    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")
    detail = stderr.strip() or stdout.strip()
    message = f"git {' '.join(args)} exited with status {result.returncode}"
    if detail:
        message += f": {detail}"
    cause = subprocess.CalledProcessError(
        result.returncode, cmd, result.stdout, result.stderr,
    )
    raise GitError(
        GitErrorKind.GENERIC,
        message,
        returncode=result.returncode,
        stdout=stdout,
        stderr=stderr,
        cmd=cmd,
    ) from cause
