"""
Load ``now.json`` environment variables and validate them.
"""

from .exceptions import (
    CallbackError,
    ConfigError,
    FormatError,
    NowEnvError,
    PathError,
    ValidationError,
)
from .facade import NowEnv
from .loader import Loader
from .store import EnvironmentStore
from .validator import Validator

__all__ = [
    "CallbackError",
    "ConfigError",
    "EnvironmentStore",
    "FormatError",
    "Loader",
    "NowEnv",
    "NowEnvError",
    "PathError",
    "ValidationError",
    "Validator",
]
