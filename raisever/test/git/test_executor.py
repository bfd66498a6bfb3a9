"""Tests for git/executor.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from raisever.core.result import Err, Ok
from raisever.git.executor import (
    GitCommandError,
    GitCommandOptions,
    GitOutput,
    execute_git,
    format_command,
)
from raisever.output.console import MockConsole, Style


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


class TestGitCommandError:
    def test_message_names_command_only(self) -> None:
        error = GitCommandError(command="git push origin develop", returncode=128, stderr="fatal")
        assert error.message == "Unable to execute command: git push origin develop"
        assert "fatal" not in error.message
        assert str(error) == error.message


class TestGitOutput:
    def test_lines_empty(self) -> None:
        assert GitOutput(stdout="").lines() == []

    def test_lines_split(self) -> None:
        assert GitOutput(stdout="a\nb").lines() == ["a", "b"]


class TestFormatCommand:
    def test_plain_args(self) -> None:
        assert format_command(["checkout", "master"]) == "git checkout master"

    def test_quotes_whitespace(self) -> None:
        assert format_command(["commit", "-m", "Version 1.0.0."]) == "git commit -m 'Version 1.0.0.'"


class TestExecuteGit:
    @patch("subprocess.run")
    def test_runs_in_repo_path(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="develop\n")
        options = GitCommandOptions(repo_path=tmp_path, console=MockConsole(), verbose=False)

        result = execute_git(["rev-parse", "--abbrev-ref", "HEAD"], options)

        assert result == Ok(GitOutput(stdout="develop", stderr=""))
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "rev-parse", "--abbrev-ref", "HEAD"]
        assert kwargs["cwd"] == str(tmp_path)

    @patch("subprocess.run")
    def test_strips_only_final_newline(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="line1\n\nline3\n")
        options = GitCommandOptions(repo_path=tmp_path, console=MockConsole(), verbose=False)

        result = execute_git(["diff", "--cached"], options)

        assert isinstance(result, Ok)
        assert result.value.lines() == ["line1", "", "line3"]

    @patch("subprocess.run")
    def test_failure_is_generic_message(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=128, stderr="fatal: 'nowhere' does not appear to be a git repository\n"
        )
        options = GitCommandOptions(repo_path=tmp_path, console=MockConsole(), verbose=False)

        result = execute_git(["push", "nowhere", "develop"], options)

        assert isinstance(result, Err)
        assert result.error.message == "Unable to execute command: git push nowhere develop"
        assert result.error.returncode == 128
        assert "does not appear" in result.error.stderr

    @patch("subprocess.run")
    def test_launch_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = FileNotFoundError("git")
        options = GitCommandOptions(repo_path=tmp_path, console=MockConsole(), verbose=False)

        result = execute_git(["status"], options)

        assert isinstance(result, Err)
        assert result.error.returncode == -1

    @patch("subprocess.run")
    def test_verbose_echoes_and_mirrors(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="out\n", stderr="Switched to branch 'master'\n"
        )
        console = MockConsole()
        options = GitCommandOptions(repo_path=tmp_path, console=console, verbose=True)

        execute_git(["checkout", "master"], options)

        assert len(console.commands) == 1
        assert console.commands[0].endswith("$ git checkout master")
        assert "out" in console.messages
        assert "Switched to branch 'master'" in console.messages

    @patch("subprocess.run")
    def test_verbose_prompt_prefix_is_relative(
        self, mock_run: MagicMock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_run.return_value = make_completed_process()
        repo = tmp_path / "repo"
        repo.mkdir()
        monkeypatch.chdir(tmp_path)
        console = MockConsole()

        execute_git(["status"], GitCommandOptions(repo_path=repo, console=console))
        execute_git(["status"], GitCommandOptions(repo_path=tmp_path, console=console))

        assert console.commands == ["repo$ git status", "$ git status"]

    @patch("subprocess.run")
    def test_verbose_failure_shows_stderr(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=1, stderr="fatal: boom\n")
        console = MockConsole()

        execute_git(["tag", "-a", "1.0.0", "-m", "1.0.0"], GitCommandOptions(tmp_path, console))

        assert console.find("fatal: boom")[0].style == Style.ERROR

    @patch("subprocess.run")
    def test_quiet_prints_nothing(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=1, stdout="x", stderr="y")
        console = MockConsole()

        execute_git(["status"], GitCommandOptions(tmp_path, console, verbose=False))

        assert console.outputs == []
