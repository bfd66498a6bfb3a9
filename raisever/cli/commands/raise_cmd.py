"""Raise command - bump package.json, update changelog, commit/merge/tag/push."""

from __future__ import annotations

import typer

from raisever.cli.commands._helpers import exit_release_error
from raisever.cli.context import build_context
from raisever.core.config import ConfigOverrides
from raisever.core.result import Err, Ok
from raisever.services.raise_version import RaiseOptions, raise_version


def raise_(
    release: str | None = typer.Argument(
        None, help="Which part of version to update (major, minor, patch) or an explicit version"
    ),
    skip_update: bool = typer.Option(
        False, "--skip-update", "-s", help="Don't update package.json file"
    ),
    changelog: bool | None = typer.Option(
        None, "--changelog/--no-changelog", "-l", help="Update version in changelog file"
    ),
    changelog_path: str | None = typer.Option(
        None, "--changelog-path", "-f", help="Path to changelog file", show_default=False
    ),
    changelog_encoding: str | None = typer.Option(
        None, "--changelog-encoding", "-e", help="Encoding of changelog file", show_default=False
    ),
    changelog_prefix: str | None = typer.Option(
        None,
        "--changelog-prefix",
        "-h",
        help="Prefix for version header in changelog file (not --help)",
        show_default=False,
    ),
    changelog_bullet: str | None = typer.Option(
        None,
        "--changelog-bullet",
        "-b",
        help="Bullet character for changes' item in changelog file",
        show_default=False,
    ),
    git: bool | None = typer.Option(None, "--git/--no-git", "-g", help="Commit updates to git"),
    git_release: str | None = typer.Option(
        None, "--git-release", "-r", help="Git release branch", show_default=False
    ),
    git_development: str | None = typer.Option(
        None, "--git-development", "-d", help="Git development branch", show_default=False
    ),
    git_remote: str | None = typer.Option(
        None, "--git-remote", "-o", help="Git remote repository name", show_default=False
    ),
    git_commit: bool | None = typer.Option(
        None, "--git-commit/--no-git-commit", "-c", help="Commit changes to development branch"
    ),
    git_merge: bool | None = typer.Option(
        None, "--git-merge/--no-git-merge", "-m", help="Merge changes to release branch"
    ),
    git_all: bool | None = typer.Option(
        None, "--git-all/--no-git-all", "-a", help="Commit all changes"
    ),
    git_tag: bool | None = typer.Option(
        None, "--git-tag/--no-git-tag", "-t", help="Create git tag"
    ),
    git_push: bool | None = typer.Option(
        None, "--git-push/--no-git-push", "-p", help="Push git changes to remote repository"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Don't echo git commands"),
) -> None:
    """Raise version. Options not given fall back to .raiseverrc."""
    ctx = build_context()

    options = RaiseOptions(
        release=release,
        skip_update=skip_update,
        overrides=ConfigOverrides(
            changelog=changelog,
            changelog_path=changelog_path,
            changelog_encoding=changelog_encoding,
            changelog_prefix=changelog_prefix,
            changelog_bullet=changelog_bullet,
            git=git,
            git_release=git_release,
            git_development=git_development,
            git_remote=git_remote,
            git_commit=git_commit,
            git_merge=git_merge,
            git_all=git_all,
            git_tag=git_tag,
            git_push=git_push,
        ),
        verbose=not quiet,
    )

    match raise_version(options, start_dir=ctx.cwd, console=ctx.console):
        case Ok(version):
            ctx.console.success(f"Version {version}")
        case Err(error):
            exit_release_error(error, ctx.console)
