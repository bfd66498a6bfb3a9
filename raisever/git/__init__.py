"""Git layer: command executor, repository primitives, version transaction.

Usage:
    from raisever.git import ReleaseOptions, update_git_repository_version

    result = update_git_repository_version(
        ReleaseOptions(target_version="1.2.0", manifest_path=Path("package.json")),
        console=console,
    )
    if isinstance(result, Err):
        console.error(result.error.message)
"""

from raisever.git.errors import (
    CommandFailed,
    NothingToCommit,
    PreconditionFailed,
    RollbackFailed,
    VersionUpdateError,
)
from raisever.git.executor import (
    GitCommandError,
    GitCommandOptions,
    GitOutput,
    execute_git,
    format_command,
)
from raisever.git.repository import TAGS, Repository
from raisever.git.transaction import (
    ReleaseOptions,
    TransactionProgress,
    TransactionStep,
    rollback,
    update_git_repository_version,
)

__all__ = [
    # Executor
    "GitCommandError",
    "GitCommandOptions",
    "GitOutput",
    "execute_git",
    "format_command",
    # Repository
    "TAGS",
    "Repository",
    # Transaction
    "ReleaseOptions",
    "TransactionProgress",
    "TransactionStep",
    "rollback",
    "update_git_repository_version",
    # Errors
    "CommandFailed",
    "NothingToCommit",
    "PreconditionFailed",
    "RollbackFailed",
    "VersionUpdateError",
]
