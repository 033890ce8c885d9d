"""Runtime configuration.

Resolves settings from environment variables, falling back to conventional
defaults, and from an optional per-project YAML file found by searching
upwards from the working directory.

Environment variables:
    PROJKIT_GIT: git executable (default: git)
    PROJKIT_SILENT: silence git command echo (1/true/yes/on)
    PROJKIT_NO_COLOR, NO_COLOR: disable ANSI colors in command echo
    PROJKIT_CONFIG_NAME: project config file name (default: .projkit.yaml)
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from projkit.fs.abspath import AbsPath

_DEFAULT_GIT = "git"
_DEFAULT_CONFIG_NAME = ".projkit.yaml"
_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def git_executable() -> str:
    """Return the git executable to invoke."""
    return os.environ.get("PROJKIT_GIT") or _DEFAULT_GIT


def silent_default() -> bool:
    """Return True if git command echo is silenced by the environment."""
    return _env_flag("PROJKIT_SILENT")


def color_enabled() -> bool:
    """Return False if either NO_COLOR convention is set."""
    return not (os.environ.get("NO_COLOR") or os.environ.get("PROJKIT_NO_COLOR"))


def config_name() -> str:
    """Return the project config file name."""
    return os.environ.get("PROJKIT_CONFIG_NAME") or _DEFAULT_CONFIG_NAME


def find_project_config(start: AbsPath | Path | str | None = None) -> AbsPath:
    """Search upwards from *start* (default: cwd) for the project config file.

    Returns:
        Path of the nearest config file, or an unset AbsPath.
    """
    origin = AbsPath(start) if start is not None else AbsPath(os.getcwd())
    return origin.find_upwards(config_name())


def load_project_config(path: AbsPath | Path | str) -> dict:
    """Read and parse a project config file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed config dict (empty for an empty file).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the top level is not a mapping.
    """
    config_path = Path(str(path))
    with open(config_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} is not a YAML mapping")
    return data


def git_settings(config: dict | None = None) -> dict:
    """Merge environment defaults with the ``git:`` section of *config*.

    Returns:
        Dict with keys: silent, executable.
    """
    settings = {"silent": silent_default(), "executable": git_executable()}
    section = (config or {}).get("git") or {}
    if not isinstance(section, dict):
        raise ValueError("'git' section of project config must be a mapping")
    if "silent" in section:
        settings["silent"] = bool(section["silent"])
    if section.get("executable"):
        settings["executable"] = str(section["executable"])
    return settings
