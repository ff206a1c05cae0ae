"""
Entry point for loading ``now.json`` variables and requiring them afterwards.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List

from .exceptions import PathError
from .loader import Loader
from .store import EnvironmentStore
from .validator import Validator

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "now.json"

# Defined by the hosting platform; its presence means variables are already injected.
SENTINEL_VARIABLE = "NOW_REGION"


class NowEnv:
    """Loads the ``env`` object of a JSON file and hands out validators for it."""

    def __init__(
        self,
        path: str | Path,
        file_name: str = DEFAULT_FILE_NAME,
        store: EnvironmentStore | None = None,
    ):
        self.file_path = self._get_file_path(path, file_name)
        self.loader = Loader(self.file_path, immutable=True, store=store)

    @staticmethod
    def _get_file_path(path: str | Path, file_name: object) -> str:
        if not isinstance(file_name, str):
            file_name = DEFAULT_FILE_NAME
        return str(path).rstrip(os.sep) + os.sep + file_name

    def load(self) -> List[str]:
        """Load variables without replacing ones that are already defined."""

        return self._load_data()

    def safe_load(self) -> List[str]:
        """Like ``load`` but a missing or unreadable file yields an empty list."""

        try:
            return self._load_data()
        except PathError as exc:
            logger.debug("%s", exc)
            return []

    def overload(self) -> List[str]:
        """Load variables, replacing any existing values."""

        return self._load_data(overload=True)

    def _load_data(self, overload: bool = False) -> List[str]:
        if self.loader.get_environment_variable(SENTINEL_VARIABLE) is not None:
            logger.debug("%s is set, skipping %s", SENTINEL_VARIABLE, self.file_path)
            return []
        return self.loader.set_immutable(not overload).load()

    def required(self, names: str | Iterable[str]) -> Validator:
        if isinstance(names, str):
            names = [names]
        return Validator(list(names), self.loader)

    def get_environment_variable_names(self) -> List[str]:
        return list(self.loader.variable_names)


__all__ = ["DEFAULT_FILE_NAME", "NowEnv", "SENTINEL_VARIABLE"]
