"""package.json discovery and version updates."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from raisever.core.result import Err, Ok, Result
from raisever.core.structured import StrDict, as_str_dict
from raisever.output.console import ConsoleProtocol
from raisever.platform.files import atomic_write_text, file_exists
from raisever.services.errors import ReleaseError
from raisever.services.semver import compare, is_release_bump, parse_version

PACKAGE_JSON = "package.json"


@dataclass(frozen=True, slots=True)
class VersionChange:
    version: str
    legacy_version: str


def find_package_json(start_dir: Path) -> Path | None:
    """Nearest package.json in start_dir or any of its parents."""
    start = start_dir.resolve()
    for parent in (start, *start.parents):
        candidate = parent / PACKAGE_JSON
        if file_exists(candidate):
            return candidate
    return None


def _read_package_json(path: Path) -> Result[StrDict, ReleaseError]:
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        return Err(ReleaseError(kind="io_failed", message=f'Unable to read "{path}": {e}'))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(ReleaseError(kind="io_failed", message=f'Invalid JSON in "{path}": {e}'))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ReleaseError(kind="io_failed", message=f'"{path}" must contain a JSON object'))
    return Ok(data)


def get_package_json_version(path: Path) -> Result[str, ReleaseError]:
    data = _read_package_json(path)
    if isinstance(data, Err):
        return data
    version = data.value.get("version")
    if not isinstance(version, str) or not version:
        return Err(
            ReleaseError(
                kind="invalid_version", message="Version property is not specified or invalid"
            )
        )
    return Ok(version)


def _change_label(release: str, version: str, legacy_version: str) -> str:
    if is_release_bump(release):
        return release
    new, old = parse_version(version), parse_version(legacy_version)
    assert new is not None and old is not None
    match compare(new, old):
        case -1:
            return "revert"
        case 1:
            return "raise"
        case _:
            return "updating"


def update_package_json_version(
    path: Path,
    release: str,
    *,
    console: ConsoleProtocol,
    write: bool = True,
) -> Result[VersionChange, ReleaseError]:
    """Set the "version" field of package.json.

    Args:
        path: package.json to update
        release: "major", "minor", "patch" or an explicit version
        console: Narration
        write: False computes the change without touching the file

    Returns:
        Ok(VersionChange) with the new and the previous version.
    """
    console.print(f'Updating "{path}"...')

    data_result = _read_package_json(path)
    if isinstance(data_result, Err):
        return data_result
    data = data_result.value

    legacy_raw = data.get("version")
    legacy = parse_version(legacy_raw) if isinstance(legacy_raw, str) else None
    if legacy is None:
        return Err(
            ReleaseError(
                kind="invalid_version", message="Version property is not specified or invalid"
            )
        )
    legacy_version = str(legacy_raw)

    explicit = parse_version(release)
    if explicit is not None:
        version = release
    elif is_release_bump(release):
        version = str(legacy.bump(release))
    else:
        return Err(ReleaseError(kind="invalid_input", message="Unable to increase release version"))

    label = _change_label(release, version, legacy_version)
    console.print(f"{label}: {legacy_version} => {version}")

    data["version"] = version
    if write:
        try:
            atomic_write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
        except OSError as e:
            return Err(ReleaseError(kind="io_failed", message=f'Unable to write "{path}": {e}'))
    console.print(f'Version in "{path}" is updated.')
    return Ok(VersionChange(version=version, legacy_version=legacy_version))
