"""Command wrapper around the git executable for a single project directory.

Every call spawns git with ``cwd`` set to the project directory; the process
working directory is never changed. Unless the repo is silent, each command
and its output are echoed through the log sink (``print`` by default).
"""

from __future__ import annotations

import os
from typing import Callable

from projkit.config import silent_default
from projkit.fs.abspath import AbsPath
from projkit.git.errors import GitError, GitErrorKind
from projkit.git.runner import run_git, style, to_lines
from projkit.git.state import GitState, RemoteInfo, classify, operation_in_progress

AUTO_STASH_MESSAGE = "projkit-auto-stash"

_GRAPH_FORMAT = (
    "%Cred%h%Creset -%C(yellow)%d%Creset %s "
    "%Cgreen(%cr) %C(bold blue)<%an>%Creset%n"
)


class GitRepo:
    """Git operations on the repository at *path*.

    Args:
        path: Project directory. May be set later via ``project_dir`` or
            ``auto_connect()``.
        log: Sink for command echo. Defaults to ``print``.
        silent: Suppress command echo. Defaults to ``PROJKIT_SILENT``.
        executable: git binary to run. Defaults to ``PROJKIT_GIT`` or ``git``.
    """

    def __init__(
        self,
        path: AbsPath | str | None = None,
        log: Callable[..., None] | None = None,
        silent: bool | None = None,
        executable: str | None = None,
    ):
        self._path = AbsPath(path)
        self.log = log or print
        self.silent = silent_default() if silent is None else silent
        self.executable = executable

    def auto_connect(self, start: AbsPath | str | None = None) -> None:
        """Connect to the repository enclosing *start* (default: cwd)."""
        origin = AbsPath(start) if start is not None else AbsPath(os.getcwd())
        gitroot = origin.find_upwards(".git", can_be_dir=True).parent
        if not gitroot.is_dir:
            raise GitError(GitErrorKind.NOT_CONNECTED, "not in git repo")
        self._path = gitroot

    @property
    def project_dir(self) -> AbsPath:
        return self._path

    @project_dir.setter
    def project_dir(self, path: AbsPath | str | None) -> None:
        self._path = AbsPath(path)

    # ── Invocation ───────────────────────────────────────────────

    def _echo(self, text: str) -> None:
        if not self.silent:
            self.log(text)

    def _invoke(
        self,
        argv: list[str],
        cwd: AbsPath,
        allowed_statuses: tuple[int, ...] | list[int],
        keep_color: bool,
    ) -> bytes:
        dirinfo = style(f"(in {cwd}) ", "blue")
        self._echo(dirinfo + style("git " + " ".join(argv), "blue"))
        try:
            result = run_git(argv, cwd.abspath, allowed_statuses, self.executable)
        except GitError as e:
            self._echo(style(f"git command failed: {e}", "red"))
            raise

        if result.returncode != 0:
            self._echo(
                style(f"git command returned with allowed status {result.returncode}", "dim")
            )
            return b""

        output = result.stdout.decode("utf-8", errors="replace")
        if output:
            self._echo(output if keep_color else style(output, "cyan"))
        return result.stdout

    def runcmd(
        self,
        gitcmd: str,
        args: list[str] | tuple[str, ...] = (),
        allowed_statuses: tuple[int, ...] | list[int] = (),
        keep_color: bool = False,
    ) -> bytes:
        """Run ``git <gitcmd> <args>`` in the project directory.

        Args:
            gitcmd: git subcommand (or a global option such as ``-c``).
            args: Remaining arguments.
            allowed_statuses: Non-zero exit statuses to treat as an empty
                result rather than a failure.
            keep_color: Echo the output as git produced it, without the
                wrapper's own highlighting.

        Returns:
            Raw standard output.

        Raises:
            GitError: NOT_CONNECTED if project_dir is unset, INVALID_PATH if
                it is not an existing directory, GENERIC if git fails.
        """
        if not self._path.is_set:
            raise GitError(
                GitErrorKind.NOT_CONNECTED,
                "GitRepo: command executed before setting project_dir",
            )
        if not self._path.is_dir:
            raise GitError(
                GitErrorKind.INVALID_PATH,
                f"GitRepo: project_dir {self._path} is not an existing directory",
            )
        return self._invoke([gitcmd] + list(args), self._path, allowed_statuses, keep_color)

    def run(self, gitcmd: str, *args: str, allowed_statuses: tuple[int, ...] = ()) -> list[str]:
        """Run an arbitrary git subcommand and return its output lines."""
        return to_lines(self.runcmd(gitcmd, list(args), allowed_statuses))

    # ── State ────────────────────────────────────────────────────

    @property
    def state(self) -> GitState:
        return classify(self)

    @property
    def is_repo(self) -> bool:
        try:
            self.status()
        except GitError:
            return False
        return True

    @property
    def has_head(self) -> bool:
        return self.current_branch_or_none is not None

    def status(self) -> None:
        self.runcmd("status")

    @property
    def parsed_status(self) -> list[str]:
        return to_lines(self.runcmd("status", ["--porcelain"]))

    @property
    def git_dir(self) -> AbsPath:
        """The repository's .git directory."""
        out = self.runcmd("rev-parse", ["--git-dir"]).decode().strip()
        return AbsPath.from_string_allowing_relative(out, self._path.abspath)

    @property
    def op_in_progress(self) -> bool:
        return operation_in_progress(self.git_dir) is not None

    # ── Stash ────────────────────────────────────────────────────

    @property
    def stash_list(self) -> list[str]:
        return to_lines(self.runcmd("stash", ["list"]))

    @property
    def stash_count(self) -> int:
        return len(self.stash_list)

    def stash_with_untracked_excluding(self, dir_to_exclude: str) -> bool:
        """Stash all changes, untracked files included, except *dir_to_exclude*.

        Returns:
            True if a stash entry was created.
        """
        before = self.stash_count
        self.runcmd("stash", [
            "push", "--include-untracked", "-m", AUTO_STASH_MESSAGE,
            "--", f":(exclude){dir_to_exclude}",
        ])
        return self.stash_count > before

    def stash_pop(self) -> None:
        self.runcmd("stash", ["pop"])

    # ── Init / clone ─────────────────────────────────────────────

    def init(self, initial_branch: str | None = None) -> None:
        args = ["-b", initial_branch] if initial_branch else []
        self.runcmd("init", args)

    def clone(self, url: str, origin: str | None = None, branch: str | None = None) -> None:
        """Clone *url* into project_dir.

        Args:
            url: Repository to clone.
            origin: Name for the remote instead of ``origin``.
            branch: Branch to check out instead of the remote's HEAD.
        """
        if not self._path.is_set:
            raise GitError(
                GitErrorKind.NOT_CONNECTED,
                "GitRepo: clone executed before setting project_dir",
            )
        parent = self._path.parent
        parent.mkdirs()
        argv = ["clone"]
        if origin:
            argv += ["--origin", origin]
        if branch:
            argv += ["--branch", branch]
        argv += [url, self._path.abspath]
        self._invoke(argv, parent, (), False)

    # ── Branches ─────────────────────────────────────────────────

    @property
    def current_branch_or_none(self) -> str | None:
        try:
            return self.runcmd("rev-parse", ["--abbrev-ref", "HEAD"]).decode().strip()
        except GitError:
            return None

    @property
    def current_branch(self) -> str:
        return self.current_branch_or_none or ""

    def branches(self) -> list[str]:
        return to_lines(self.runcmd("branch", ["--format=%(refname:short)"]))

    def show_branching_graph(self) -> None:
        if self.silent:
            return
        self.runcmd(
            "-c",
            ["color.ui=always", "log", "--graph", f"--format={_GRAPH_FORMAT}",
             "--abbrev-commit", "--date=relative", "--branches"],
            keep_color=True,
        )

    def create_branch(self, branch_name: str, branching_point: str) -> str:
        result = self.runcmd("checkout", ["-b", branch_name, branching_point])
        self.show_branching_graph()
        return result.decode().strip()

    def delete_branch(self, branch_name: str) -> str:
        return self.runcmd("branch", ["-D", branch_name]).decode().strip()

    def checkout(self, branch_name: str) -> None:
        self.runcmd("checkout", [branch_name])
        self.show_branching_graph()

    def checkout_dir_from_branch(self, directory: str, branch_name: str) -> None:
        self.runcmd("checkout", [branch_name, "--", directory])

    def set_branch_description(self, branch: str, description: str) -> None:
        self.runcmd("config", [f"branch.{branch}.description", description])

    def get_branch_description(self, branch: str) -> list[str]:
        # config exits 1 when the key is unset
        return to_lines(
            self.runcmd("config", [f"branch.{branch}.description"], allowed_statuses=[1])
        )

    # ── Merge / rebase ───────────────────────────────────────────

    def merge(self, branch_name: str) -> None:
        self.runcmd("merge", [branch_name])
        if branch_name != "HEAD":
            self.show_branching_graph()

    def rebase_branch_from_point_onto(self, branch: str, from_point: str, onto: str) -> bytes:
        result = self.runcmd("rebase", ["--onto", onto, from_point, branch])
        self.show_branching_graph()
        return result

    # ── Commits ──────────────────────────────────────────────────

    def commit(self, comment: str) -> None:
        self.runcmd("commit", ["-m", comment])

    def commit_allowing_empty(self, comment: str) -> None:
        self.runcmd("commit", ["--allow-empty", "-m", comment])

    @property
    def commit_count(self) -> int:
        try:
            return int(self.runcmd("rev-list", ["--count", "HEAD"]).decode().strip())
        except GitError:
            return 0

    def get_files_in_commit(self, commit: str) -> list[str]:
        return to_lines(
            self.runcmd(
                "diff-tree", ["--no-commit-id", "--name-only", "-r", "--root", commit],
            )
        )

    # ── Tags ─────────────────────────────────────────────────────

    def get_tags_matching(self, pattern: str) -> list[str]:
        return to_lines(self.runcmd("tag", ["-l", pattern]))

    def create_tag(self, tagname: str, ref: str | None = None) -> None:
        self.runcmd("tag", [tagname] + ([ref] if ref else []))

    def move_tag_to_head(self, tagname: str) -> None:
        self.runcmd("tag", ["-d", tagname])
        self.runcmd("tag", [tagname])

    def move_tag(self, tagname: str, ref: str) -> None:
        self.runcmd("tag", ["-d", tagname])
        self.runcmd("tag", [tagname, ref])

    # ── Files ────────────────────────────────────────────────────

    def mv(self, src: str, dst: str) -> None:
        self.runcmd("mv", [src, dst])

    def add(self, path: str | list[str]) -> None:
        paths = list(path) if isinstance(path, (list, tuple)) else [path]
        try:
            self.runcmd("add", paths)
        except GitError as e:
            raise GitError(
                GitErrorKind.ADD_FAILED,
                e.message,
                returncode=e.returncode,
                stdout=e.stdout,
                stderr=e.stderr,
                cmd=e.cmd,
            ) from e

    def ls_files(self) -> list[str]:
        return to_lines(self.runcmd("ls-files"))

    def ls_files_as_abspath(self) -> list[AbsPath]:
        return [self.project_dir.add(f) for f in self.ls_files()]

    def check_ignore(self, path: str) -> bool:
        """Return True if git ignores *path*.

        Relative paths are taken relative to project_dir.
        """
        if not self._path.is_set:
            raise GitError(GitErrorKind.INVALID_PATH, path)
        abspath = AbsPath.from_string_allowing_relative(path, self._path.abspath).realpath
        if not abspath.is_set:
            raise GitError(GitErrorKind.INVALID_PATH, path)

        try:
            # check-ignore exits 1 when the path is not ignored
            lines = to_lines(self.runcmd("check-ignore", [abspath.abspath], [1]))
        except GitError as e:
            raise GitError(
                GitErrorKind.CHECK_IGNORE_FAILED,
                e.message,
                returncode=e.returncode,
                stderr=e.stderr,
                cmd=e.cmd,
            ) from e

        return abspath.abspath in lines

    # ── Remotes ──────────────────────────────────────────────────

    def add_remote(self, name: str, url: str, track_branch: str | None = None) -> None:
        options = ["add", name, url]
        if track_branch:
            options += ["-t", track_branch]
        self.runcmd("remote", options)

    def remove_remote(self, name: str) -> None:
        self.runcmd("remote", ["remove", name])

    def rename_remote(self, old_name: str, new_name: str) -> None:
        self.runcmd("remote", ["rename", old_name, new_name])

    def get_remotes(self) -> list[RemoteInfo]:
        """List remotes in ``git remote -v`` order, one entry per remote."""
        result = []
        for line in to_lines(self.runcmd("remote", ["-v"])):
            name, _, rest = line.partition("\t")
            url, _, kind = rest.rpartition(" ")
            if kind == "(fetch)":
                result.append(RemoteInfo(name=name, url=url))
        return result

    def fetch(self, remote: str | None = None) -> None:
        self.runcmd("fetch", [remote] if remote else [])
