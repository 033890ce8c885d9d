"""Shared test fixtures for projkit."""

import pytest

from projkit.fs import AbsPath, build
from projkit.git import GitRepo

SAMPLE_TREE = {
    "base": {
        "file1": "this is file1",
        "file2": "this is file2",
        "symlink_to_file1": {"->": "file1"},
        "f": "f in base",
        "inner": {"file-in-inner": "this is base/inner/file-in-inner"},
        "inner2": {"file-in-inner2": "this is base/inner2/file-in-inner2"},
    },
    "dir1": {
        "1file1": "this is 1file1",
        "f": "f in dir1",
        "dir11": {"11file1": "this is 11file1", "f": "f in dir1/dir11"},
        "dir12": {"12file1": "this is 12file1", "f": "f in dir1/dir12"},
    },
    "link1": {"->": "dir1/dir11"},
    "link2": {"->": "base/file1"},
}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep git and projkit from reading the developer's configuration."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    for name, value in {
        "GIT_AUTHOR_NAME": "test", "GIT_AUTHOR_EMAIL": "t@t",
        "GIT_COMMITTER_NAME": "test", "GIT_COMMITTER_EMAIL": "t@t",
    }.items():
        monkeypatch.setenv(name, value)
    for name in ("PROJKIT_GIT", "PROJKIT_SILENT", "PROJKIT_NO_COLOR",
                 "PROJKIT_CONFIG_NAME", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_fs(tmp_path):
    """A small tree of files, directories and symlinks under tmp_path/fs."""
    return build(AbsPath(tmp_path / "fs"), SAMPLE_TREE)


@pytest.fixture
def project_dir(tmp_path):
    p = AbsPath(tmp_path / "proj")
    p.mkdirs()
    return p


@pytest.fixture
def repo(project_dir):
    """A freshly initialized repository with no commits."""
    gl = GitRepo(project_dir, silent=True)
    gl.init("main")
    return gl


@pytest.fixture
def committed_repo(repo):
    """A repository with one commit containing ``the_file``."""
    repo.project_dir.add("the_file").save_str("first line\n")
    repo.add("the_file")
    repo.commit("initial commit")
    return repo
