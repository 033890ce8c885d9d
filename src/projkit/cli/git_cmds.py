"""Git CLI commands."""

import argparse


def _connect(args: argparse.Namespace, required: bool = True):
    from projkit.git import GitError, GitRepo

    settings = getattr(args, "git_settings", {})
    repo = GitRepo(silent=settings.get("silent"), executable=settings.get("executable"))
    if args.dir:
        repo.project_dir = args.dir
        return repo
    try:
        repo.auto_connect()
    except GitError:
        if required:
            raise
        repo.project_dir = "."
    return repo


def cmd_git_state(args: argparse.Namespace) -> int:
    repo = _connect(args, required=False)
    print(f"  {repo.project_dir}: {repo.state.value}")
    return 0


def cmd_git_branch(args: argparse.Namespace) -> int:
    repo = _connect(args)
    branch = repo.current_branch
    if not branch:
        print("  No commits yet.")
        return 1
    print(branch)
    return 0


def cmd_git_remotes(args: argparse.Namespace) -> int:
    repo = _connect(args)
    remotes = repo.get_remotes()
    if not remotes:
        print("  No remotes configured.")
        return 0
    for r in remotes:
        print(f"  {r.name:<20} {r.url}")
    return 0


def cmd_git_ls_files(args: argparse.Namespace) -> int:
    repo = _connect(args)
    files = repo.ls_files_as_abspath() if args.abs else repo.ls_files()
    for f in files:
        print(f)
    return 0


def cmd_git_run(args: argparse.Namespace) -> int:
    repo = _connect(args)
    lines = repo.run(args.gitcmd, *args.args, allowed_statuses=tuple(args.allow_status))
    if repo.silent:
        for line in lines:
            print(line)
    return 0
