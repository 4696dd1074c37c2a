"""Core types: results, exit codes and config loading."""

from .config import ConfigError, FileMapping, ReleaseConfig, TargetConfig, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "FileMapping",
    "ReleaseConfig",
    "TargetConfig",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
