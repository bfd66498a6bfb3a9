"""Core types: results, exit codes and configuration."""

from .config import (
    RAISEVERRC_NAME,
    ChangelogConfig,
    ConfigError,
    ConfigOverrides,
    GitConfig,
    RaiseVersionConfig,
    load_config,
    load_config_or_default,
    write_config,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "RAISEVERRC_NAME",
    "ChangelogConfig",
    "ConfigError",
    "ConfigOverrides",
    "GitConfig",
    "RaiseVersionConfig",
    "load_config",
    "load_config_or_default",
    "write_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
