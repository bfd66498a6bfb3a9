"""Version-update transaction over a git repository.

Records a new version in git: commit on the development branch, merge into
the release branch, tag, push. Git has no multi-command transactions, so
every completed mutation is recorded in TransactionProgress. When a later
command fails, the recorded steps are undone newest first, which leaves
the repository either fully updated or back where it started.

Two branching models are supported:

- gitflow (release != development): commit "Raise version: X." on
  development, merge --no-ff into release as "Version X.", tag the merge.
- centralized (release == development): commit "Version X." and tag it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

from raisever.core.result import Err, Ok, Result
from raisever.output.console import ConsoleProtocol, Style

from .errors import (
    CommandFailed,
    NothingToCommit,
    PreconditionFailed,
    RollbackFailed,
    VersionUpdateError,
)
from .executor import GitCommandError
from .repository import TAGS, Repository

__all__ = [
    "ReleaseOptions",
    "TransactionProgress",
    "TransactionStep",
    "rollback",
    "update_git_repository_version",
]


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    """Everything one version-update transaction needs.

    Attributes:
        target_version: Version to record, already computed; must be non-empty
        working_directory: Repository root
        manifest_path: package.json to stage (ignored with stage_all_changes)
        changelog_path: Changelog to stage, when changelog updates are on
        release_branch: Merge target that receives the tag
        development_branch: Branch that must be checked out
        remote_name: Remote for the push leg
        commit: Stage and commit; off means the caller committed already
        merge_to_release: Merge development into release (gitflow only)
        stage_all_changes: `git add -A` instead of the two files
        create_tag: Create an annotated tag named target_version
        push_to_remote: Push branches (and the tag) at the end
        verbose: Echo commands and narration
    """

    target_version: str
    working_directory: Path = field(default_factory=Path.cwd)
    manifest_path: Path | None = None
    changelog_path: Path | None = None
    release_branch: str = "master"
    development_branch: str = "develop"
    remote_name: str = "origin"
    commit: bool = True
    merge_to_release: bool = True
    stage_all_changes: bool = False
    create_tag: bool = True
    push_to_remote: bool = False
    verbose: bool = True

    @property
    def gitflow(self) -> bool:
        """Two-branch model; False means commit and tag on a single branch."""
        return self.release_branch != self.development_branch

    @property
    def merges(self) -> bool:
        return self.gitflow and self.merge_to_release


class TransactionStep(IntEnum):
    """Durable changes, in the only order they can happen."""

    DEVELOPMENT_COMMITTED = 1
    RELEASE_COMMITTED = 2
    TAGGED = 3


@dataclass(slots=True)
class TransactionProgress:
    """What one transaction has changed so far.

    Steps are only ever added, each at most once and in increasing order.

    Attributes:
        pending_stash: Changes stashed by the merge leg and not yet popped
    """

    _steps: list[TransactionStep] = field(default_factory=list)
    pending_stash: bool = False

    def mark(self, step: TransactionStep) -> None:
        if self._steps and step <= self._steps[-1]:
            raise ValueError(f"{step.name} cannot follow {self._steps[-1].name}")
        self._steps.append(step)

    def done(self, step: TransactionStep) -> bool:
        return step in self._steps

    def completed(self) -> tuple[TransactionStep, ...]:
        return tuple(self._steps)

    def undo_order(self) -> tuple[TransactionStep, ...]:
        """Completed steps, most recent first."""
        return tuple(reversed(self._steps))


class _Transaction:
    """One run of the protocol. Every method returns at the first failure."""

    def __init__(self, repo: Repository, options: ReleaseOptions) -> None:
        self.repo = repo
        self.options = options
        self.progress = TransactionProgress()

    def run(self) -> Result[None, VersionUpdateError]:
        steps: list[Callable[[], Result[None, VersionUpdateError]]] = []
        if self.options.commit:
            steps.append(self._commit)
        if self.options.merges:
            steps.append(self._merge)
        if self.options.push_to_remote:
            steps.append(self._push)

        for step in steps:
            result = step()
            if isinstance(result, Err):
                return result
        return Ok(None)

    def _stage(self) -> Result[None, GitCommandError]:
        o = self.options
        if o.stage_all_changes:
            return self.repo.add_all()
        paths = [p for p in (o.manifest_path, o.changelog_path) if p is not None]
        return self.repo.add(paths)

    def _commit(self) -> Result[None, VersionUpdateError]:
        o = self.options
        repo = self.repo

        staged = self._stage()
        if isinstance(staged, Err):
            return Err(CommandFailed(staged.error))

        diff = repo.diff_cached()
        if isinstance(diff, Err):
            return Err(CommandFailed(diff.error))
        if not diff.value:
            return Err(NothingToCommit())

        if o.gitflow:
            # Tagging waits for the merge commit on the release branch.
            committed = repo.commit(f"Raise version: {o.target_version}.")
            if isinstance(committed, Err):
                return Err(CommandFailed(committed.error))
            self.progress.mark(TransactionStep.DEVELOPMENT_COMMITTED)
            return Ok(None)

        committed = repo.commit(f"Version {o.target_version}.")
        if isinstance(committed, Err):
            return Err(CommandFailed(committed.error))
        self.progress.mark(TransactionStep.DEVELOPMENT_COMMITTED)
        return self._tag()

    def _tag(self) -> Result[None, VersionUpdateError]:
        o = self.options
        if not o.create_tag:
            return Ok(None)
        tagged = self.repo.tag(o.target_version, o.target_version)
        if isinstance(tagged, Err):
            return Err(CommandFailed(tagged.error))
        self.progress.mark(TransactionStep.TAGGED)
        return Ok(None)

    def _merge(self) -> Result[None, VersionUpdateError]:
        o = self.options
        repo = self.repo

        stashed = repo.stash_save()
        if isinstance(stashed, Err):
            return Err(CommandFailed(stashed.error))
        self.progress.pending_stash = stashed.value

        switched = repo.checkout(o.release_branch)
        if isinstance(switched, Err):
            return Err(CommandFailed(switched.error))

        merged = repo.merge(o.development_branch, f"Version {o.target_version}.")
        if isinstance(merged, Err):
            return Err(CommandFailed(merged.error))
        self.progress.mark(TransactionStep.RELEASE_COMMITTED)

        tagged = self._tag()
        if isinstance(tagged, Err):
            return tagged

        switched = repo.checkout(o.development_branch)
        if isinstance(switched, Err):
            return Err(CommandFailed(switched.error))

        if self.progress.pending_stash:
            popped = repo.stash_pop()
            if isinstance(popped, Err):
                return Err(CommandFailed(popped.error))
            self.progress.pending_stash = False
        return Ok(None)

    def _push(self) -> Result[None, VersionUpdateError]:
        o = self.options
        refs = [o.development_branch]
        if o.gitflow and self.progress.done(TransactionStep.RELEASE_COMMITTED):
            refs.append(o.release_branch)
        if self.progress.done(TransactionStep.TAGGED):
            refs.append(TAGS)

        for ref in refs:
            pushed = self.repo.push(o.remote_name, ref)
            if isinstance(pushed, Err):
                return Err(CommandFailed(pushed.error))
        return Ok(None)


def _hard_reset(repo: Repository, branch: str) -> Result[None, GitCommandError]:
    """Drop the tip commit of branch, whichever branch is checked out."""
    stashed = repo.stash_save()
    if isinstance(stashed, Err):
        return stashed
    current = repo.current_branch()
    if isinstance(current, Err):
        return current

    switch = current.value != branch
    if switch:
        result = repo.checkout(branch)
        if isinstance(result, Err):
            return result
    result = repo.reset_hard("HEAD~1")
    if isinstance(result, Err):
        return result
    if switch:
        result = repo.checkout(current.value)
        if isinstance(result, Err):
            return result
    if stashed.value:
        popped = repo.stash_pop()
        if isinstance(popped, Err):
            return popped
    return Ok(None)


def _print_rollback_intent(
    progress: TransactionProgress, options: ReleaseOptions, console: ConsoleProtocol
) -> None:
    def flag(step: TransactionStep) -> str:
        return "true" if progress.done(step) else "false"

    console.print(
        "Some git error is occurred, reverting back everything that is possible:", Style.ERROR
    )
    console.print(
        f"- {options.release_branch} committed: {flag(TransactionStep.RELEASE_COMMITTED)}",
        Style.ERROR,
    )
    console.print(
        f"- {options.development_branch} committed: "
        f"{flag(TransactionStep.DEVELOPMENT_COMMITTED)}",
        Style.ERROR,
    )
    console.print(f"- tagged: {flag(TransactionStep.TAGGED)}", Style.ERROR)


def rollback(
    progress: TransactionProgress,
    repo: Repository,
    options: ReleaseOptions,
    console: ConsoleProtocol,
) -> Result[None, GitCommandError]:
    """Undo every completed step, newest first, then return to development.

    Stops at the first compensating command that fails; later steps depend
    on earlier ones having succeeded.
    """
    if options.verbose:
        _print_rollback_intent(progress, options, console)

    for step in progress.undo_order():
        match step:
            case TransactionStep.TAGGED:
                result = repo.remove_tag(options.target_version)
            case TransactionStep.RELEASE_COMMITTED:
                result = _hard_reset(repo, options.release_branch)
            case TransactionStep.DEVELOPMENT_COMMITTED:
                result = _hard_reset(repo, options.development_branch)
            case _:
                raise AssertionError(f"unexpected step: {step}")
        if isinstance(result, Err):
            return result

    # A failure inside the merge leg leaves us on the release branch with
    # the development residue still stashed.
    current = repo.current_branch()
    if isinstance(current, Err):
        return current
    if current.value != options.development_branch:
        switched = repo.checkout(options.development_branch)
        if isinstance(switched, Err):
            return switched
    if progress.pending_stash:
        popped = repo.stash_pop()
        if isinstance(popped, Err):
            return popped
        progress.pending_stash = False
    return Ok(None)


def update_git_repository_version(
    options: ReleaseOptions, *, console: ConsoleProtocol
) -> Result[None, VersionUpdateError]:
    """Commit, merge, tag and push a new version, or change nothing.

    Args:
        options: Target version, branches and feature toggles
        console: Receives echoed commands and narration (verbose mode)

    Returns:
        Ok(None) on success. On failure the Err carries:
        - PreconditionFailed / NothingToCommit: nothing was committed
        - CommandFailed: a git command failed and every completed step
          was undone
        - RollbackFailed: a git command failed and undoing it failed too;
          the repository needs manual attention
    """
    if not options.target_version.strip():
        return Err(PreconditionFailed("Version to record must not be empty"))

    if options.verbose:
        console.print("Updating git repository...")

    repo = Repository(options.working_directory, console=console, verbose=options.verbose)

    current = repo.current_branch()
    if isinstance(current, Err):
        return Err(CommandFailed(current.error))
    if current.value != options.development_branch:
        return Err(
            PreconditionFailed(
                f'Git repository can be updated only from development "{options.development_branch}" '
                f'branch, currently on "{current.value}".'
            )
        )

    tx = _Transaction(repo, options)
    result = tx.run()
    if isinstance(result, Ok):
        return result

    error = result.error
    if not isinstance(error, CommandFailed):
        return result

    undone = rollback(tx.progress, repo, options, console)
    if isinstance(undone, Err):
        return Err(RollbackFailed(cause=error, rollback_error=undone.error))
    return result
