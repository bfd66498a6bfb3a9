"""Exit codes for the raise-version CLI.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad release kind, wrong branch, nothing to commit)
- 2: Environment error (no package.json, broken .raiseverrc)
- 3: Git error (a git command failed, the transaction was rolled back)
- 4: I/O error (package.json or changelog could not be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
