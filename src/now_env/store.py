"""
Environment variable storage kept in sync across every lookup surface.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)

# Process-wide views other modules may read directly.
PROCESS_ENV: Dict[str, str] = {}
SERVER_ENV: Dict[str, str] = {}


class EnvironmentAccessor(ABC):
    """Read/write access to an environment surface outside the store."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """Return the value for ``name`` or ``None`` when it is not defined."""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        ...

    @abstractmethod
    def unset(self, name: str) -> None:
        ...


class MappingAccessor(EnvironmentAccessor):
    """Adapts any mutable mapping, ``os.environ`` included, to the accessor interface."""

    def __init__(self, mapping: MutableMapping[str, str]):
        self._mapping = mapping

    def get(self, name: str) -> Optional[str]:
        return self._mapping.get(name)

    def set(self, name: str, value: str) -> None:
        self._mapping[name] = value

    def unset(self, name: str) -> None:
        self._mapping.pop(name, None)


def os_environment() -> MappingAccessor:
    """Accessor over ``os.environ``; writes go through ``putenv``/``unsetenv``."""

    return MappingAccessor(os.environ)


class EnvironmentStore:
    """
    Looks variables up in the process mapping, the server mapping and the raw
    environment, in that order, and writes to all three together.

    When ``immutable`` is set, ``set`` leaves already defined variables alone and
    ``clear`` does nothing.
    """

    def __init__(
        self,
        process_env: MutableMapping[str, str] | None = None,
        server_env: MutableMapping[str, str] | None = None,
        raw: EnvironmentAccessor | None = None,
        legacy: EnvironmentAccessor | None = None,
        immutable: bool = False,
    ):
        self.process_env = PROCESS_ENV if process_env is None else process_env
        self.server_env = SERVER_ENV if server_env is None else server_env
        self.raw = raw or os_environment()
        self.legacy = legacy
        self.immutable = immutable

    def set_immutable(self, immutable: bool) -> "EnvironmentStore":
        self.immutable = bool(immutable)
        return self

    def get_immutable(self) -> bool:
        return self.immutable

    def get(self, name: str) -> Optional[str]:
        if name in self.process_env:
            return self.process_env[name]
        if name in self.server_env:
            return self.server_env[name]
        return self.raw.get(name)

    def set(self, name: str, value: str) -> None:
        if self.immutable and self.get(name) is not None:
            logger.debug("Keeping existing value for %s", name)
            return

        if self.legacy is not None and self.legacy.get(name) is not None:
            self.legacy.set(name, value)

        self.raw.set(name, value)
        self.process_env[name] = value
        self.server_env[name] = value
        logger.debug("Set %s", name)

    def clear(self, name: str) -> None:
        if self.immutable:
            logger.debug("Refusing to clear %s on an immutable store", name)
            return

        self.raw.unset(name)
        self.process_env.pop(name, None)
        self.server_env.pop(name, None)
        logger.debug("Cleared %s", name)


__all__ = [
    "EnvironmentAccessor",
    "EnvironmentStore",
    "MappingAccessor",
    "PROCESS_ENV",
    "SERVER_ENV",
    "os_environment",
]
