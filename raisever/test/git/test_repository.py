"""Tests for git/repository.py."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from raisever.core.result import Err, Ok
from raisever.git import executor as executor_mod
from raisever.git.repository import TAGS, Repository
from raisever.output.console import MockConsole

from fakes import FakeGit


@pytest.fixture
def fake(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake_git = FakeGit()
    monkeypatch.setattr(executor_mod, "run_process", fake_git)
    return fake_git


def _repo(path: Path) -> Repository:
    return Repository(path, console=MockConsole(), verbose=False)


class TestRepositoryQueries:
    def test_current_branch(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.branch = "feature/x"
        assert _repo(tmp_path).current_branch() == Ok("feature/x")
        assert fake.calls == [["rev-parse", "--abbrev-ref", "HEAD"]]

    def test_diff_cached_lines(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.staged = "diff --git a/x b/x\n+1"
        assert _repo(tmp_path).diff_cached() == Ok(["diff --git a/x b/x", "+1"])

    def test_diff_cached_empty(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.staged = ""
        assert _repo(tmp_path).diff_cached() == Ok([])


class TestRepositoryStash:
    def test_stash_save_reports_stashed(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.dirty = True
        assert _repo(tmp_path).stash_save() == Ok(True)
        assert fake.joined_calls() == ["stash list", "stash", "stash list"]

    def test_stash_save_noop_is_not_error(self, fake: FakeGit, tmp_path: Path) -> None:
        assert _repo(tmp_path).stash_save() == Ok(False)

    def test_stash_pop(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.dirty = True
        repo = _repo(tmp_path)
        repo.stash_save()
        assert repo.stash_pop() == Ok(True)
        assert fake.dirty is True

    def test_stash_failure_propagates(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.fail_on = ("stash pop",)
        result = _repo(tmp_path).stash_pop()
        assert isinstance(result, Err)
        assert result.error.message == "Unable to execute command: git stash pop"


class TestRepositoryMutations:
    @pytest.mark.parametrize(
        ("call", "expected"),
        [
            (lambda r: r.checkout("master"), ["checkout", "master"]),
            (lambda r: r.add(["package.json", Path("my docs/CHANGELOG.md")]),
             ["add", "package.json", "my docs/CHANGELOG.md"]),
            (lambda r: r.add_all(), ["add", "-A"]),
            (
                lambda r: r.commit("Raise version: 1.0.0."),
                ["commit", "-m", "Raise version: 1.0.0."],
            ),
            (lambda r: r.merge("develop", "Version 1.0.0."),
             ["merge", "--no-ff", "develop", "-m", "Version 1.0.0."]),
            (lambda r: r.tag("1.0.0"), ["tag", "-a", "1.0.0", "-m", "1.0.0"]),
            (
                lambda r: r.tag("1.0.0", "Release 1.0.0"),
                ["tag", "-a", "1.0.0", "-m", "Release 1.0.0"],
            ),
            (lambda r: r.remove_tag("1.0.0"), ["tag", "-d", "1.0.0"]),
            (lambda r: r.push("origin", "develop"), ["push", "origin", "develop"]),
            (lambda r: r.push("origin", TAGS), ["push", "origin", "--tags"]),
            (lambda r: r.reset_hard(), ["reset", "--hard", "HEAD~1"]),
        ],
    )
    def test_issues_single_command(
        self,
        fake: FakeGit,
        tmp_path: Path,
        call: Callable[[Repository], object],
        expected: list[str],
    ) -> None:
        assert call(_repo(tmp_path)) == Ok(None)
        assert fake.calls == [expected]

    def test_failure_is_executor_error_unmodified(self, fake: FakeGit, tmp_path: Path) -> None:
        fake.fail_on = ("tag -a",)
        result = _repo(tmp_path).tag("1.0.0")
        assert isinstance(result, Err)
        assert result.error.command == "git tag -a 1.0.0 -m 1.0.0"
        assert result.error.message == "Unable to execute command: git tag -a 1.0.0 -m 1.0.0"
