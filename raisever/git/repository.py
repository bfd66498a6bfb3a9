"""Git repository primitives.

Each Repository method is a thin wrapper that issues one git command
(stash_save/stash_pop issue three: they compare the stash list before and
after) and interprets its output. Failures are the executor's
GitCommandError, passed through unmodified.

Usage:
    repo = Repository(Path("/path/to/repo"), console=RichConsole())

    match repo.current_branch():
        case Ok(branch):
            print(f"Branch: {branch}")
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from raisever.core.result import Err, Ok, Result
from raisever.output.console import ConsoleProtocol

from .executor import GitCommandError, GitCommandOptions, GitOutput, execute_git

__all__ = ["Repository", "TAGS"]

# Push target meaning "all tags" rather than a branch
TAGS = "--tags"


class Repository:
    """Git operations on a single working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path, *, console: ConsoleProtocol, verbose: bool = True) -> None:
        self.path = path
        self._options = GitCommandOptions(repo_path=path, console=console, verbose=verbose)

    # -- queries ------------------------------------------------------------

    def current_branch(self) -> Result[str, GitCommandError]:
        """Name of the checked-out branch ("HEAD" when detached)."""
        return self._run(["rev-parse", "--abbrev-ref", "HEAD"]).map(lambda o: o.stdout.strip())

    def diff_cached(self) -> Result[list[str], GitCommandError]:
        """Staged diff as lines. An empty list means nothing is staged."""
        return self._run(["diff", "--cached"]).map(GitOutput.lines)

    def stash_list(self) -> Result[list[str], GitCommandError]:
        return self._run(["stash", "list"]).map(GitOutput.lines)

    # -- mutations ----------------------------------------------------------

    def checkout(self, branch: str) -> Result[None, GitCommandError]:
        return self._run_void(["checkout", branch])

    def stash_save(self) -> Result[bool, GitCommandError]:
        """Stash local changes.

        Returns:
            Ok(True) if something was stashed, Ok(False) if the working tree
            was clean and `git stash` was a no-op.
        """
        return self._stash(["stash"], grew=True)

    def stash_pop(self) -> Result[bool, GitCommandError]:
        """Pop the latest stash. Ok(True) if the stash list shrank."""
        return self._stash(["stash", "pop"], grew=False)

    def add(self, paths: Sequence[str | Path]) -> Result[None, GitCommandError]:
        """Stage the given paths."""
        return self._run_void(["add", *(str(p) for p in paths)])

    def add_all(self) -> Result[None, GitCommandError]:
        """Stage every change, including deletions and untracked files."""
        return self._run_void(["add", "-A"])

    def commit(self, message: str) -> Result[None, GitCommandError]:
        return self._run_void(["commit", "-m", message])

    def merge(self, branch: str, message: str) -> Result[None, GitCommandError]:
        """Merge branch into HEAD, always creating a merge commit (--no-ff)."""
        return self._run_void(["merge", "--no-ff", branch, "-m", message])

    def tag(self, version: str, message: str | None = None) -> Result[None, GitCommandError]:
        """Create an annotated tag; the message defaults to the tag name."""
        return self._run_void(["tag", "-a", version, "-m", message or version])

    def remove_tag(self, version: str) -> Result[None, GitCommandError]:
        return self._run_void(["tag", "-d", version])

    def push(self, remote: str, ref: str) -> Result[None, GitCommandError]:
        """Push one branch, or every tag when ref is TAGS."""
        return self._run_void(["push", remote, ref])

    def reset_hard(self, ref: str = "HEAD~1") -> Result[None, GitCommandError]:
        """Move the current branch to ref, discarding index and working tree changes."""
        return self._run_void(["reset", "--hard", ref])

    # -- internals ----------------------------------------------------------

    def _stash(self, args: list[str], *, grew: bool) -> Result[bool, GitCommandError]:
        before = self.stash_list()
        if isinstance(before, Err):
            return before
        result = self._run(args)
        if isinstance(result, Err):
            return result
        after = self.stash_list()
        if isinstance(after, Err):
            return after

        if grew:
            return Ok(len(after.value) > len(before.value))
        return Ok(len(after.value) < len(before.value))

    def _run_void(self, args: list[str]) -> Result[None, GitCommandError]:
        return self._run(args).map(lambda _: None)

    def _run(self, args: list[str]) -> Result[GitOutput, GitCommandError]:
        """Run a git command in this repository."""
        return execute_git(args, self._options)
