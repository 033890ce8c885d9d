"""Path CLI commands."""

import argparse

import yaml


def _kind(p) -> str:
    if p.is_symlink:
        return f"symlink -> {p.symlink_target}"
    if p.is_dir:
        return "empty directory" if p.is_empty_dir else "directory"
    if p.is_file:
        return "binary file" if p.is_binary_file else "file"
    return "missing"


def cmd_path_info(args: argparse.Namespace) -> int:
    from projkit.fs import AbsPath

    if not args.paths:
        print("  No paths given.")
        return 1
    for raw in args.paths:
        p = AbsPath(raw)
        print(f"  {str(p):<60} {_kind(p)}")
    return 0


def cmd_path_find_up(args: argparse.Namespace) -> int:
    from projkit.fs import AbsPath

    start = AbsPath.from_string_allowing_relative(args.start)
    found = start.find_upwards(args.name, can_be_dir=args.dirs)
    if not found.is_set:
        print(f"  {args.name} not found above {start}")
        return 1
    print(found)
    return 0


def cmd_path_versions(args: argparse.Namespace) -> int:
    from projkit.fs import AbsPath

    p = AbsPath(args.file)
    versions = p.existing_versions
    if not versions:
        print(f"  No versions of {p}")
        return 0
    for n in versions:
        print(f"  {p}.{n}")
    print(f"\n  Latest: {p.max_ver}")
    return 0


def cmd_path_backup(args: argparse.Namespace) -> int:
    from projkit.fs import AbsPath

    p = AbsPath(args.file).validate("exists")
    new_path = p.rename_to_next_ver()
    print(f"  {p} -> {new_path}")
    return 0


def cmd_path_tree(args: argparse.Namespace) -> int:
    from projkit.fs import AbsPath, snapshot

    directory = AbsPath(args.dir).validate("is_dir")
    tree = snapshot(directory, max_levels=args.depth, with_contents_of=args.contents)
    print(yaml.safe_dump({directory.basename or str(directory): tree}, sort_keys=True), end="")
    return 0


def cmd_path_rmrf(args: argparse.Namespace) -> int:
    from projkit.fs import AbsPath

    directory = AbsPath(args.dir).validate("is_dir")
    directory.rmrfdir(args.must_match, remove_self=args.remove_self)
    what = "Removed" if args.remove_self else "Emptied"
    print(f"  {what} {directory}")
    return 0
