"""Command-line front end for projkit.

Usage:
    projkit path info <path> [<path> ...]
    projkit path find-up <name> [--start <dir>] [--dirs]
    projkit path versions <file>
    projkit path backup <file>
    projkit path tree <dir> [--depth N] [--contents <name> ...]
    projkit path rmrf <dir> --must-match <regex> [--remove-self]
    projkit git [--dir <path>] state
    projkit git [--dir <path>] branch
    projkit git [--dir <path>] remotes
    projkit git [--dir <path>] ls-files [--abs]
    projkit git [--dir <path>] run [--allow-status N ...] <gitcmd> [<args> ...]
"""

import argparse
import sys

from projkit.cli.app import CliApp
from projkit.cli.git_cmds import (
    cmd_git_branch,
    cmd_git_ls_files,
    cmd_git_remotes,
    cmd_git_run,
    cmd_git_state,
)
from projkit.cli.path_cmds import (
    cmd_path_backup,
    cmd_path_find_up,
    cmd_path_info,
    cmd_path_rmrf,
    cmd_path_tree,
    cmd_path_versions,
)
from projkit.config import find_project_config, git_settings, load_project_config


class ProjkitApp(CliApp):
    def build_parser(self) -> argparse.ArgumentParser:
        return build_parser()

    def dispatch_table(self):
        return {
            ("path", "info"): cmd_path_info,
            ("path", "find-up"): cmd_path_find_up,
            ("path", "versions"): cmd_path_versions,
            ("path", "backup"): cmd_path_backup,
            ("path", "tree"): cmd_path_tree,
            ("path", "rmrf"): cmd_path_rmrf,
            ("git", "state"): cmd_git_state,
            ("git", "branch"): cmd_git_branch,
            ("git", "remotes"): cmd_git_remotes,
            ("git", "ls-files"): cmd_git_ls_files,
            ("git", "run"): cmd_git_run,
        }

    def before_command(self, args: argparse.Namespace) -> None:
        # Project config is optional; its git section overrides env defaults.
        config_path = find_project_config()
        config = load_project_config(config_path) if config_path.is_set else {}
        args.git_settings = git_settings(config)
        if args.quiet:
            args.git_settings["silent"] = True
        if hasattr(args, "paths"):
            args.paths = self.fix(args.path, args.paths)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projkit",
        description="Path and git utilities for project scaffolding",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Show full tracebacks and debug logging",
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Do not echo git commands and their output",
    )
    sub = parser.add_subparsers(dest="command")

    # path
    path = sub.add_parser("path", help="Filesystem path operations")
    path_sub = path.add_subparsers(dest="subcommand")

    info = path_sub.add_parser("info", help="Describe one or more paths")
    info.add_argument("path", nargs="?", default=None)
    info.add_argument("paths", nargs="*")

    find_up = path_sub.add_parser(
        "find-up", help="Search the ancestor chain for an entry",
    )
    find_up.add_argument("name")
    find_up.add_argument(
        "--start", default=None,
        help="Directory to start from (default: cwd)",
    )
    find_up.add_argument(
        "--dirs", action="store_true",
        help="Match directories as well as files",
    )

    versions = path_sub.add_parser(
        "versions", help="List numbered backups of a file",
    )
    versions.add_argument("file")

    backup = path_sub.add_parser(
        "backup", help="Rename a file to its next numbered version",
    )
    backup.add_argument("file")

    tree = path_sub.add_parser("tree", help="Print a directory snapshot as YAML")
    tree.add_argument("dir")
    tree.add_argument(
        "--depth", type=int, default=-1,
        help="Levels to descend (default: unlimited)",
    )
    tree.add_argument(
        "--contents", nargs="*", default=None,
        help="File names whose contents should be included",
    )

    rmrf = path_sub.add_parser(
        "rmrf", help="Recursively delete a directory's contents",
    )
    rmrf.add_argument("dir")
    rmrf.add_argument(
        "--must-match", required=True,
        help="Regex every deleted path must match",
    )
    rmrf.add_argument(
        "--remove-self", action="store_true",
        help="Remove the directory itself as well",
    )

    # git
    git = sub.add_parser("git", help="Git repository operations")
    git.add_argument(
        "--dir", default=None,
        help="Repository directory (default: enclosing repo of cwd)",
    )
    git_sub = git.add_subparsers(dest="subcommand")

    git_sub.add_parser("state", help="Classify the repository state")
    git_sub.add_parser("branch", help="Show the current branch")
    git_sub.add_parser("remotes", help="List remotes")

    ls = git_sub.add_parser("ls-files", help="List tracked files")
    ls.add_argument(
        "--abs", action="store_true",
        help="Print absolute paths",
    )

    run = git_sub.add_parser("run", help="Run an arbitrary git subcommand")
    run.add_argument(
        "--allow-status", type=int, action="append", default=[],
        help="Non-zero exit status to accept (repeatable; must precede <gitcmd>)",
    )
    run.add_argument("gitcmd")
    run.add_argument("args", nargs=argparse.REMAINDER)

    return parser


def main(argv: list[str] | None = None) -> int:
    return ProjkitApp().main(argv)


if __name__ == "__main__":
    sys.exit(main())
