"""Platform abstraction layer: subprocesses and files."""

from .files import atomic_write_text, file_exists
from .process import NO_EXIT_STATUS, ProcessError, ProcessOutput, run

__all__ = [
    # files
    "atomic_write_text",
    "file_exists",
    # process
    "NO_EXIT_STATUS",
    "ProcessError",
    "ProcessOutput",
    "run",
]
