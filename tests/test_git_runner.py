"""Tests for low-level git invocation and output parsing."""

import subprocess

import pytest

from projkit.git import GitError, GitErrorKind, run_git, to_lines
from projkit.git.runner import style


class TestToLines:
    def test_bytes(self):
        assert to_lines(b"a\nb\n\nc\n") == ["a", "b", "c"]

    def test_str(self):
        assert to_lines("one\n\ntwo") == ["one", "two"]

    def test_list_passes_through(self):
        assert to_lines(["x", "", "y"]) == ["x", "y"]

    def test_empty(self):
        assert to_lines(b"") == []
        assert to_lines("") == []


class TestRunGit:
    def test_success(self, tmp_path):
        result = run_git(["init", "-b", "main"], tmp_path)
        assert result.returncode == 0
        assert (tmp_path / ".git").is_dir()

    def test_allowed_status(self, tmp_path):
        run_git(["init"], tmp_path)
        result = run_git(["config", "no.such.key"], tmp_path, allowed_statuses=[1])
        assert result.returncode == 1
        assert result.stdout == b""

    def test_disallowed_status(self, tmp_path):
        with pytest.raises(GitError) as exc_info:
            run_git(["status"], tmp_path)
        err = exc_info.value
        assert err.kind is GitErrorKind.GENERIC
        assert err.returncode == 128
        assert "not a git repository" in err.stderr
        assert err.cmd[1:] == ["status"]
        assert isinstance(err.__cause__, subprocess.CalledProcessError)
        assert err.__cause__.returncode == 128
        assert err.__cause__.cmd == err.cmd

    def test_executable_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROJKIT_GIT", "/nonexistent/git")
        with pytest.raises(GitError, match="not found"):
            run_git(["status"], tmp_path)


class TestStyle:
    def test_color(self):
        assert style("x", "blue") == "\033[34mx\033[0m"

    def test_no_color(self, monkeypatch):
        monkeypatch.setenv("PROJKIT_NO_COLOR", "1")
        assert style("x", "blue") == "x"

    def test_empty_text(self):
        assert style("", "cyan") == ""


class TestGitError:
    def test_repr_and_str(self):
        err = GitError(GitErrorKind.ADD_FAILED, "boom")
        assert str(err) == "boom"
        assert repr(err) == "GitError(AddFailed, 'boom')"
        assert err.returncode is None
