"""Repository state classification.

State is derived from live git calls every time it is asked for. Repository
state can change from outside the process, so nothing here is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from projkit.fs.abspath import AbsPath

if TYPE_CHECKING:
    from projkit.git.repo import GitRepo


class GitState(str, Enum):
    UNDEFINED = "Undefined"  # project path was not set
    NON_REPO = "Non Repo"  # project path is not in a git repo
    NO_COMMITS = "No Commits"  # git repo does not have any commits yet
    DIRTY = "Dirty"  # there are uncommitted changes
    CLEAN = "Clean"  # no uncommitted changes
    OP_IN_PROGRESS = "OpInProgress"  # a rebase or merge operation is in progress


@dataclass(frozen=True)
class RemoteInfo:
    name: str
    url: str


# Marker entries git leaves in its directory while a multi-step
# operation is waiting on the user.
IN_PROGRESS_MARKERS = (
    "MERGE_HEAD",
    "rebase-merge",
    "rebase-apply",
    "CHERRY_PICK_HEAD",
    "REVERT_HEAD",
)


def operation_in_progress(git_dir: AbsPath) -> str | None:
    """Return the first in-progress marker found in *git_dir*, if any."""
    for marker in IN_PROGRESS_MARKERS:
        if git_dir.add(marker).exists:
            return marker
    return None


def classify(repo: GitRepo) -> GitState:
    """Classify the repository at ``repo.project_dir``.

    Undefined → NonRepo → NoCommits → OpInProgress → Dirty → Clean; the first
    condition that holds wins.
    """
    if not repo.project_dir.is_set:
        return GitState.UNDEFINED
    if not repo.is_repo:
        return GitState.NON_REPO
    if not repo.has_head:
        return GitState.NO_COMMITS
    if repo.op_in_progress:
        return GitState.OP_IN_PROGRESS
    if repo.parsed_status:
        return GitState.DIRTY
    return GitState.CLEAN
