"""`raise-version init`: write a default .raiseverrc."""

from __future__ import annotations

from pathlib import Path

from raisever.core.config import RAISEVERRC_NAME, RaiseVersionConfig, load_config, write_config
from raisever.core.result import Err, Ok, Result
from raisever.output.console import ConsoleProtocol
from raisever.services.errors import ReleaseError
from raisever.services.package import find_package_json


def detect_config_path(start_dir: Path) -> Result[Path, ReleaseError]:
    """.raiseverrc belongs next to the nearest package.json."""
    package_json = find_package_json(start_dir)
    if package_json is None:
        return Err(
            ReleaseError(kind="package_not_found", message='Unable to locate "package.json" file.')
        )
    return Ok(package_json.parent / RAISEVERRC_NAME)


def init_config(
    *, start_dir: Path, console: ConsoleProtocol
) -> Result[RaiseVersionConfig, ReleaseError]:
    """Create .raiseverrc with defaults; an existing file is kept and returned."""
    path_result = detect_config_path(start_dir)
    if isinstance(path_result, Err):
        return path_result
    path = path_result.value

    if path.is_file():
        console.warning(f'File "{path}" already exists.')
        loaded = load_config(path)
        if isinstance(loaded, Err):
            return Err(ReleaseError(kind="config_invalid", message=loaded.error.message))
        return loaded

    config = RaiseVersionConfig()
    written = write_config(path, config)
    if isinstance(written, Err):
        return Err(ReleaseError(kind="io_failed", message=written.error.message))
    console.success(f'Created "{path}".')
    return Ok(config)
