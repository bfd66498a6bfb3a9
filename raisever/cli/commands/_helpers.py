"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from raisever.core.errors import ErrorCode
from raisever.output.console import ConsoleProtocol, Style
from raisever.services.errors import ReleaseError


def release_error_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "invalid_input" | "git_rejected":
            return ErrorCode.USER_ERROR
        case "package_not_found" | "config_invalid" | "invalid_version":
            return ErrorCode.ENV_ERROR
        case "git_failed":
            return ErrorCode.GIT_ERROR
        case "io_failed" | "changelog_failed":
            return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def exit_release_error(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    """Print the error (and hint) and exit with its mapped code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error)))
