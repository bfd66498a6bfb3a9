"""Single git command execution.

execute_git() runs one git command in an explicit repository directory,
echoes it (verbose mode) the way a shell prompt would, mirrors the captured
output, and turns any failure into a GitCommandError whose message names
the command but not git's stderr. The stderr stays on the error object for
callers that need the detail.
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path

from raisever.core.result import Err, Ok, Result
from raisever.output.console import ConsoleProtocol, Style
from raisever.platform.process import run as run_process

__all__ = [
    "GitCommandError",
    "GitCommandOptions",
    "GitOutput",
    "execute_git",
    "format_command",
]


@dataclass(frozen=True, slots=True)
class GitCommandError:
    """A git command exited non-zero or could not be started.

    Attributes:
        command: Full command line, e.g. "git tag -a 1.0.0 -m 1.0.0"
        returncode: Process exit code (-1 if git could not be launched)
        stderr: Captured standard error
    """

    command: str
    returncode: int = 1
    stderr: str = ""

    @property
    def message(self) -> str:
        return f"Unable to execute command: {self.command}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class GitOutput:
    """Captured output of a successful git command."""

    stdout: str
    stderr: str = ""

    def lines(self) -> list[str]:
        """stdout split into lines; empty output gives an empty list."""
        return self.stdout.split("\n") if self.stdout else []


@dataclass(frozen=True, slots=True)
class GitCommandOptions:
    """Where and how loudly to run git.

    Attributes:
        repo_path: Repository root, passed as the subprocess cwd
        console: Receives echoed commands and mirrored output
        verbose: Echo and mirror; never changes what is executed
    """

    repo_path: Path
    console: ConsoleProtocol
    verbose: bool = True


def format_command(args: list[str]) -> str:
    """Render git arguments as a copy-pasteable shell line."""
    return shlex.join(["git", *args])


def _strip_final_newline(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def _prompt_prefix(repo_path: Path) -> str:
    """Repository path relative to the process cwd, "" when they match."""
    try:
        rel = os.path.relpath(repo_path, Path.cwd())
    except ValueError:
        # Different drives on Windows
        return str(repo_path)
    return "" if rel == "." else rel


def execute_git(args: list[str], options: GitCommandOptions) -> Result[GitOutput, GitCommandError]:
    """Run `git <args>` in options.repo_path and wait for it to finish.

    Args:
        args: git arguments, one list item per argument (no escaping needed)
        options: Repository path, console and verbosity

    Returns:
        Ok(GitOutput) with the final newline stripped from stdout,
        Err(GitCommandError) on any failure.
    """
    command = format_command(args)
    console = options.console
    if options.verbose:
        console.command(f"{_prompt_prefix(options.repo_path)}$ {command}")

    result = run_process(["git", *args], cwd=options.repo_path)
    match result:
        case Ok(output):
            stdout = _strip_final_newline(output.stdout)
            stderr = _strip_final_newline(output.stderr)
            if options.verbose:
                if stdout:
                    console.print(stdout, Style.DIM)
                if stderr:
                    console.print(stderr, Style.DIM)
            return Ok(GitOutput(stdout=stdout, stderr=stderr))
        case Err(e):
            stderr = e.stderr.strip()
            if options.verbose:
                if e.stdout.strip():
                    console.print(e.stdout.strip(), Style.DIM)
                if stderr:
                    console.print(stderr, Style.ERROR)
            return Err(GitCommandError(command=command, returncode=e.returncode, stderr=stderr))
