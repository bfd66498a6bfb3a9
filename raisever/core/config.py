"""Typed loading of the .raiseverrc configuration file.

The file is JSON and lives next to the project's package.json:

    {
      "changelog": {"enabled": true, "path": "CHANGELOG.md", ...},
      "git": {"enabled": true, "release": "master", "development": "develop", ...}
    }

Missing keys fall back to defaults, keys of the wrong type are rejected.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TypeVar
from pathlib import Path

from raisever.platform.files import atomic_write_text

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "RAISEVERRC_NAME",
    "ChangelogConfig",
    "ConfigError",
    "ConfigOverrides",
    "GitConfig",
    "RaiseVersionConfig",
    "load_config",
    "load_config_or_default",
    "write_config",
]

RAISEVERRC_NAME = ".raiseverrc"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when .raiseverrc cannot be read, parsed or written."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    """Changelog update settings."""

    enabled: bool = True
    path: str = "CHANGELOG.md"
    encoding: str = "utf-8"
    prefix: str = "##"
    bullet: str = "-"


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Git transaction settings.

    Attributes:
        enabled: Run the git transaction at all
        release: Release branch (merge target, tagged)
        development: Development branch (must be checked out)
        remote: Remote used by the push leg
        commit: Commit package.json/changelog on the development branch
        merge: Merge development into release (gitflow mode only)
        all: Stage all changes instead of package.json/changelog only
        tag: Create an annotated tag named after the version
        push: Push branches and tags to the remote
    """

    enabled: bool = True
    release: str = "master"
    development: str = "develop"
    remote: str = "origin"
    commit: bool = True
    merge: bool = True
    all: bool = False
    tag: bool = True
    push: bool = False


@dataclass(frozen=True, slots=True)
class ConfigOverrides:
    """Per-invocation overrides (CLI flags). None means "use the config"."""

    changelog: bool | None = None
    changelog_path: str | None = None
    changelog_encoding: str | None = None
    changelog_prefix: str | None = None
    changelog_bullet: str | None = None
    git: bool | None = None
    git_release: str | None = None
    git_development: str | None = None
    git_remote: str | None = None
    git_commit: bool | None = None
    git_merge: bool | None = None
    git_all: bool | None = None
    git_tag: bool | None = None
    git_push: bool | None = None


T = TypeVar("T")


def _pick(override: T | None, current: T) -> T:
    return current if override is None else override


@dataclass(frozen=True, slots=True)
class RaiseVersionConfig:
    """Main configuration container."""

    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    git: GitConfig = field(default_factory=GitConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> RaiseVersionConfig:
        """Create config from a parsed JSON mapping.

        Raises:
            TypeError: If a known key has the wrong type.
        """
        changelog: StrDict = get_table(data, "changelog") or {}
        git: StrDict = get_table(data, "git") or {}

        cl_default = ChangelogConfig()
        git_default = GitConfig()

        return cls(
            changelog=ChangelogConfig(
                enabled=_pick(get_bool(changelog, "enabled"), cl_default.enabled),
                path=get_str(changelog, "path") or cl_default.path,
                encoding=get_str(changelog, "encoding") or cl_default.encoding,
                prefix=get_str(changelog, "prefix") or cl_default.prefix,
                bullet=get_str(changelog, "bullet") or cl_default.bullet,
            ),
            git=GitConfig(
                enabled=_pick(get_bool(git, "enabled"), git_default.enabled),
                release=get_str(git, "release") or git_default.release,
                development=get_str(git, "development") or git_default.development,
                remote=get_str(git, "remote") or git_default.remote,
                commit=_pick(get_bool(git, "commit"), git_default.commit),
                merge=_pick(get_bool(git, "merge"), git_default.merge),
                all=_pick(get_bool(git, "all"), git_default.all),
                tag=_pick(get_bool(git, "tag"), git_default.tag),
                push=_pick(get_bool(git, "push"), git_default.push),
            ),
        )

    def to_dict(self) -> StrDict:
        c = self.changelog
        g = self.git
        return {
            "changelog": {
                "enabled": c.enabled,
                "path": c.path,
                "encoding": c.encoding,
                "prefix": c.prefix,
                "bullet": c.bullet,
            },
            "git": {
                "enabled": g.enabled,
                "release": g.release,
                "development": g.development,
                "remote": g.remote,
                "commit": g.commit,
                "merge": g.merge,
                "all": g.all,
                "tag": g.tag,
                "push": g.push,
            },
        }

    def with_overrides(self, o: ConfigOverrides) -> RaiseVersionConfig:
        """Return a copy with every non-None override applied."""
        c = self.changelog
        g = self.git
        return replace(
            self,
            changelog=replace(
                c,
                enabled=_pick(o.changelog, c.enabled),
                path=_pick(o.changelog_path, c.path),
                encoding=_pick(o.changelog_encoding, c.encoding),
                prefix=_pick(o.changelog_prefix, c.prefix),
                bullet=_pick(o.changelog_bullet, c.bullet),
            ),
            git=replace(
                g,
                enabled=_pick(o.git, g.enabled),
                release=_pick(o.git_release, g.release),
                development=_pick(o.git_development, g.development),
                remote=_pick(o.git_remote, g.remote),
                commit=_pick(o.git_commit, g.commit),
                merge=_pick(o.git_merge, g.merge),
                all=_pick(o.git_all, g.all),
                tag=_pick(o.git_tag, g.tag),
                push=_pick(o.git_push, g.push),
            ),
        )


def _parse_json(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a JSON file, handling read and decode errors."""
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f'File "{path}" doesn\'t exist', path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a JSON object", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[RaiseVersionConfig, ConfigError]:
    """Load and parse configuration from a .raiseverrc file.

    Args:
        path: Path to .raiseverrc

    Returns:
        Ok(RaiseVersionConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_json(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(RaiseVersionConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[RaiseVersionConfig, ConfigError]:
    """Load config from file, or return the defaults if it doesn't exist.

    An existing but broken file is still an error.
    """
    if not path.is_file():
        return Ok(RaiseVersionConfig())
    return load_config(path)


def write_config(path: Path, config: RaiseVersionConfig) -> Result[None, ConfigError]:
    """Write config as 2-space indented JSON, replacing any existing file."""
    content = json.dumps(config.to_dict(), indent=2) + "\n"
    try:
        atomic_write_text(path, content)
    except OSError as e:
        return Err(ConfigError(f"Unable to write {path}: {e}", path=path))
    return Ok(None)
