"""
Exception hierarchy shared by the loader, validator and manifest helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


class NowEnvError(RuntimeError):
    """Base class for every error raised by now_env."""


class PathError(NowEnvError):
    """Raised when the environment file is missing, unreadable or not a regular file."""


class FormatError(NowEnvError):
    """Raised when the environment file is not JSON or lacks a flat ``env`` object."""


class CallbackError(NowEnvError):
    """Raised when an assertion predicate cannot be called."""


class ConfigError(NowEnvError):
    """Raised when a validation manifest is invalid."""


@dataclass(frozen=True)
class ValidationFailure:
    name: str
    reason: str

    def __str__(self) -> str:
        return f"{self.name} {self.reason}"


class ValidationError(NowEnvError):
    """Raised when one or more variables fail a single assertion pass."""

    def __init__(self, failures: List[ValidationFailure]):
        self.failures = list(failures)
        joined = ", ".join(str(failure) for failure in self.failures)
        super().__init__(f"One or more environment variables failed assertions: {joined}.")


__all__ = [
    "CallbackError",
    "ConfigError",
    "FormatError",
    "NowEnvError",
    "PathError",
    "ValidationError",
    "ValidationFailure",
]
