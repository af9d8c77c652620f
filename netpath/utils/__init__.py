"""Netpath utilities - logging and environment helpers."""

from netpath.utils.env import (
    EnvVarError,
    EnvVarTypeError,
    get_env,
)
from netpath.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "get_env",
]
