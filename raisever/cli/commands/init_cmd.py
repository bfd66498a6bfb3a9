from __future__ import annotations

from raisever.cli.commands._helpers import exit_release_error
from raisever.cli.context import build_context
from raisever.core.result import Err
from raisever.services.init_config import init_config


def init() -> None:
    """Create default .raiseverrc configuration file."""
    ctx = build_context()
    result = init_config(start_dir=ctx.cwd, console=ctx.console)
    if isinstance(result, Err):
        exit_release_error(result.error, ctx.console)
