"""Error kinds returned by the version-update transaction.

The variants form a closed set; the CLI matches on them to pick an exit
code and prints `.message`. Message texts are part of the user contract.
"""

from __future__ import annotations

from dataclasses import dataclass

from .executor import GitCommandError

__all__ = [
    "CommandFailed",
    "NothingToCommit",
    "PreconditionFailed",
    "RollbackFailed",
    "VersionUpdateError",
]


@dataclass(frozen=True, slots=True)
class PreconditionFailed:
    """Rejected before anything was changed (e.g. wrong branch)."""

    message: str


@dataclass(frozen=True, slots=True)
class NothingToCommit:
    """The staged diff was empty; nothing was committed."""

    @property
    def message(self) -> str:
        return "There is nothing to commit"


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """A git command failed; completed steps have been rolled back."""

    error: GitCommandError

    @property
    def command(self) -> str:
        return self.error.command

    @property
    def message(self) -> str:
        return self.error.message


@dataclass(frozen=True, slots=True)
class RollbackFailed:
    """A git command failed, then so did one of the compensating commands.

    Attributes:
        cause: The original failure that triggered the rollback
        rollback_error: The compensating command that failed
    """

    cause: CommandFailed
    rollback_error: GitCommandError

    @property
    def message(self) -> str:
        return f"{self.cause.message}; rollback failed: {self.rollback_error.message}"


VersionUpdateError = PreconditionFailed | NothingToCommit | CommandFailed | RollbackFailed
