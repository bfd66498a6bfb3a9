"""Subprocess execution with Result-based error handling.

A failing command is a value, not an exception. The working directory is
always passed explicitly; the process-wide current directory is never
changed.

Usage:
    match run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_path):
        case Ok(output):
            print(output.stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from raisever.core.result import Err, Ok, Result

__all__ = ["NO_EXIT_STATUS", "ProcessError", "ProcessOutput", "run"]

# returncode when the process never started or was killed on timeout
NO_EXIT_STATUS = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out or could not be started.

    Attributes:
        command: argv as executed
        returncode: Exit status, NO_EXIT_STATUS if there was none
        stdout: Whatever was captured before the failure
        stderr: Error details; the OS error text for launch failures
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def exited(self) -> bool:
        return self.returncode != NO_EXIT_STATUS

    def __str__(self) -> str:
        head = " ".join(self.command[:3])
        if len(self.command) > 3:
            head += " ..."
        if not self.exited:
            return f"{head} did not run: {self.stderr}"
        return f"{head} failed (exit {self.returncode})"


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured output of a successful command."""

    stdout: str
    stderr: str


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[ProcessOutput, ProcessError]:
    """Run cmd in cwd, wait for it to exit and capture its output.

    Blocks until the process exits: the next git command must see the index
    and working tree left by the previous one.

    Args:
        cmd: Command and arguments, one list item per argument
        cwd: Working directory for the child process
        env: Full environment for the child (inherits ours if None)
        timeout: Seconds before the child is killed (None waits forever)
    """
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            list(argv),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(
            ProcessError(argv, NO_EXIT_STATUS, partial, f"Command timed out after {timeout}s")
        )
    except OSError as e:
        return Err(ProcessError(argv, NO_EXIT_STATUS, stderr=str(e)))

    stdout = proc.stdout or ""
    stderr = proc.stderr or ""
    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, stdout, stderr))
    return Ok(ProcessOutput(stdout, stderr))
