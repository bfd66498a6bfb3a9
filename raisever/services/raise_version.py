"""The raise workflow: package.json, then changelog, then git.

Each stage undoes its own changes on failure so that a failed raise leaves
the project as it was: a changelog failure restores package.json, and the
git transaction rolls itself back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from raisever.core.config import (
    RAISEVERRC_NAME,
    ConfigOverrides,
    RaiseVersionConfig,
    load_config_or_default,
)
from raisever.core.result import Err, Ok, Result
from raisever.git.errors import (
    CommandFailed,
    NothingToCommit,
    PreconditionFailed,
    RollbackFailed,
    VersionUpdateError,
)
from raisever.git.transaction import ReleaseOptions, update_git_repository_version
from raisever.output.console import ConsoleProtocol
from raisever.services.changelog import update_changelog_version
from raisever.services.errors import ReleaseError
from raisever.services.package import (
    VersionChange,
    find_package_json,
    get_package_json_version,
    update_package_json_version,
)
from raisever.services.semver import is_release_bump, is_valid


@dataclass(frozen=True, slots=True)
class RaiseOptions:
    """One `raise-version raise` invocation.

    Attributes:
        release: "major", "minor", "patch" or an explicit version
        skip_update: Keep package.json as is and release its current version
        overrides: CLI flags layered over .raiseverrc
        verbose: Echo git commands and narration
    """

    release: str | None = None
    skip_update: bool = False
    overrides: ConfigOverrides = field(default_factory=ConfigOverrides)
    verbose: bool = True


def load_project_config(
    package_json: Path, overrides: ConfigOverrides
) -> Result[RaiseVersionConfig, ReleaseError]:
    """.raiseverrc next to package.json (defaults if absent) plus overrides."""
    loaded = load_config_or_default(package_json.parent / RAISEVERRC_NAME)
    if isinstance(loaded, Err):
        return Err(ReleaseError(kind="config_invalid", message=loaded.error.message))
    return Ok(loaded.value.with_overrides(overrides))


def _git_error(error: VersionUpdateError) -> ReleaseError:
    match error:
        case PreconditionFailed() | NothingToCommit():
            return ReleaseError(kind="git_rejected", message=error.message)
        case CommandFailed():
            return ReleaseError(
                kind="git_failed",
                message=error.message,
                hint=error.error.stderr or None,
            )
        case RollbackFailed():
            return ReleaseError(
                kind="git_failed",
                message=error.message,
                hint="The repository could not be restored, check `git log` and `git stash list`.",
            )


def _update_version(
    package_json: Path, options: RaiseOptions, console: ConsoleProtocol
) -> Result[VersionChange, ReleaseError]:
    if options.skip_update:
        current = get_package_json_version(package_json)
        if isinstance(current, Err):
            return current
        return Ok(VersionChange(version=current.value, legacy_version=current.value))

    release = options.release
    if not release:
        return Err(ReleaseError(kind="invalid_input", message="Release is not specified"))
    if not is_release_bump(release) and not is_valid(release):
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="Release is invalid",
                hint="Use major, minor, patch or an explicit version like 1.2.3.",
            )
        )
    return update_package_json_version(package_json, release, console=console)


def raise_version(
    options: RaiseOptions, *, start_dir: Path, console: ConsoleProtocol
) -> Result[str, ReleaseError]:
    """Raise the project version and record it in the changelog and git.

    Returns:
        Ok(new_version) on success.
    """
    package_json = find_package_json(start_dir)
    if package_json is None:
        return Err(
            ReleaseError(kind="package_not_found", message='Unable to locate "package.json" file')
        )

    config_result = load_project_config(package_json, options.overrides)
    if isinstance(config_result, Err):
        return config_result
    config = config_result.value

    change_result = _update_version(package_json, options, console)
    if isinstance(change_result, Err):
        return change_result
    change = change_result.value

    changelog_path: Path | None = None
    if config.changelog.enabled:
        changelog_path = package_json.parent / config.changelog.path
        updated = update_changelog_version(
            changelog_path,
            change.version,
            console=console,
            encoding=config.changelog.encoding,
            prefix=config.changelog.prefix,
            bullet=config.changelog.bullet,
        )
        if isinstance(updated, Err):
            console.error("Unable to update changeLog, reverting changes back...")
            if change.version != change.legacy_version:
                reverted = update_package_json_version(
                    package_json, change.legacy_version, console=console
                )
                if isinstance(reverted, Err):
                    return Err(
                        ReleaseError(
                            kind=updated.error.kind,
                            message=updated.error.message,
                            hint=f"package.json could not be restored: {reverted.error.message}",
                        )
                    )
            return updated

    if config.git.enabled:
        git = config.git
        result = update_git_repository_version(
            ReleaseOptions(
                target_version=change.version,
                working_directory=package_json.parent,
                manifest_path=package_json,
                changelog_path=changelog_path,
                release_branch=git.release,
                development_branch=git.development,
                remote_name=git.remote,
                commit=git.commit,
                merge_to_release=git.merge,
                stage_all_changes=git.all,
                create_tag=git.tag,
                push_to_remote=git.push,
                verbose=options.verbose,
            ),
            console=console,
        )
        if isinstance(result, Err):
            return Err(_git_error(result.error))

    return Ok(change.version)
