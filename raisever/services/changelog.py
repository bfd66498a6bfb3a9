"""Insert a dated version header into a Markdown changelog.

The changelog is expected to look like:

    # Changelog

    - Pending change.
    - Another pending change.

    ## 1.1.0 (2024-05-01)

    - ...

Pending bullets sit above the newest version header. Updating to 1.2.0
inserts "## 1.2.0 (<today>)" and an empty line above those bullets.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

from raisever.core.result import Err, Ok, Result
from raisever.output.console import ConsoleProtocol
from raisever.platform.files import atomic_write_text, file_exists
from raisever.services.errors import ReleaseError
from raisever.services.semver import compare, parse_version

INITIAL_RELEASE_BULLET = "- Initial release."


def read_changelog(path: Path, *, encoding: str = "utf-8") -> Result[list[str], ReleaseError]:
    if not file_exists(path):
        return Err(
            ReleaseError(kind="changelog_failed", message=f'Changelog file "{path}" doesn\'t exist.')
        )
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        return Err(ReleaseError(kind="io_failed", message=f'Unable to read "{path}": {e}'))
    return Ok(text.split("\n"))


def _find_version_header(lines: list[str], version_re: re.Pattern[str]) -> tuple[int, str | None]:
    for i, line in enumerate(lines):
        m = version_re.match(line)
        if m:
            return i, m.group(1)
    return -1, None


def _find_bullet_start(lines: list[str], header_index: int, bullet_re: re.Pattern[str]) -> int:
    """Topmost bullet of the block directly above the version header, -1 if none."""
    start = -1
    for i in range(header_index - 1, -1, -1):
        line = lines[i]
        if bullet_re.match(line):
            start = i
        elif start >= 0 and line.replace("\t", "").strip() == "":
            break
    return start


def update_changelog_version(
    path: Path,
    version: str,
    *,
    console: ConsoleProtocol,
    encoding: str = "utf-8",
    prefix: str = "##",
    bullet: str = "-",
    today: date | None = None,
) -> Result[None, ReleaseError]:
    """Add a "<prefix> <version> (<date>)" header above the pending bullets.

    A missing changelog is created with an "Initial release." entry.
    Re-running for the version already on top is a no-op.
    """
    console.print(f'Updating "{path}"...')

    new_version = parse_version(version)
    if new_version is None:
        return Err(ReleaseError(kind="invalid_version", message=f"Version {version} is invalid"))

    version_re = re.compile(rf"^{re.escape(prefix)} (\d+\.\d+\.\d+)")
    bullet_re = re.compile(rf"^{re.escape(bullet)} .+$")

    new_changelog = not file_exists(path)
    if new_changelog:
        console.warning("Changelog file doesn't exist, let's try to create it.")
        lines: list[str] = []
    else:
        read = read_changelog(path, encoding=encoding)
        if isinstance(read, Err):
            return read
        lines = read.value

    header_index, previous = _find_version_header(lines, version_re)
    if header_index < 0:
        console.warning("There is no previous version's header in changelog file.")
        header_index = len(lines)

    if previous is not None:
        prev_version = parse_version(previous)
        if prev_version is None:
            return Err(
                ReleaseError(
                    kind="changelog_failed",
                    message=f"Previous version {previous} in changelog file is invalid.",
                )
            )
        order = compare(new_version, prev_version)
        if order == 0:
            console.warning(
                f"Changes for version {version} are already in changelog, skipping update."
            )
            return Ok(None)
        if order < 0:
            return Err(
                ReleaseError(
                    kind="changelog_failed",
                    message=(
                        f"Previous version {previous} in changelog file is not less "
                        f"then the new one {version}."
                    ),
                )
            )

    bullet_start = _find_bullet_start(lines, header_index, bullet_re)
    if bullet_start < 0:
        if not new_changelog:
            return Err(
                ReleaseError(
                    kind="changelog_failed",
                    message=(
                        f'There is no change list for new version {version} with bullets "{bullet}".'
                    ),
                )
            )
        lines.extend([INITIAL_RELEASE_BULLET, ""])
        bullet_start = 0

    stamp = (today or date.today()).strftime("%Y-%m-%d")
    lines[bullet_start:bullet_start] = [f"{prefix} {version} ({stamp})", ""]

    try:
        atomic_write_text(path, "\n".join(lines), encoding=encoding)
    except (OSError, LookupError) as e:
        return Err(ReleaseError(kind="io_failed", message=f'Unable to write "{path}": {e}'))
    console.print(f'Version in "{path}" is updated.')
    return Ok(None)
