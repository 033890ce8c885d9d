"""Git module: a thin command wrapper around the git executable."""

from projkit.git.errors import GitError, GitErrorKind
from projkit.git.repo import GitRepo
from projkit.git.runner import run_git, to_lines
from projkit.git.state import GitState, RemoteInfo

__all__ = [
    "GitError",
    "GitErrorKind",
    "GitRepo",
    "GitState",
    "RemoteInfo",
    "run_git",
    "to_lines",
]
