"""
Reads the ``env`` object of a ``now.json`` file into an EnvironmentStore.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import FormatError, PathError
from .store import EnvironmentStore

logger = logging.getLogger(__name__)


def coerce_value(value: Any) -> str:
    """Render a JSON scalar the way it should appear in the environment."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Loader:
    """Loads one JSON file into a store and remembers which names it declared."""

    def __init__(
        self,
        file_path: str | Path,
        immutable: bool = False,
        store: EnvironmentStore | None = None,
    ):
        self.file_path = str(file_path)
        self.store = store or EnvironmentStore()
        self.store.set_immutable(immutable)
        self.variable_names: List[str] = []

    def set_immutable(self, immutable: bool) -> "Loader":
        self.store.set_immutable(immutable)
        return self

    def get_immutable(self) -> bool:
        return self.store.get_immutable()

    def load(self) -> List[str]:
        """Apply every ``env`` entry and return the names declared by this call."""

        self._ensure_file_is_readable()
        variables = self._parse_json()

        for name, value in variables.items():
            self.set_environment_variable(name, value)

        logger.info("Loaded %d environment variables from %s", len(variables), self.file_path)
        return list(variables)

    def _ensure_file_is_readable(self) -> None:
        if not os.path.isfile(self.file_path) or not os.access(self.file_path, os.R_OK):
            raise PathError(f"Unable to read the environment file at {self.file_path}.")

    def _parse_json(self) -> Dict[str, Any]:
        error = FormatError(f"Unable to find the environment variables in {self.file_path}.")

        try:
            with open(self.file_path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except ValueError as exc:
            raise error from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("env"), dict):
            raise error

        variables = payload["env"]
        for name, value in variables.items():
            if isinstance(value, (dict, list)):
                raise error
            # The OS environment cannot hold these.
            if not name or "=" in name or "\x00" in name or "\x00" in coerce_value(value):
                raise error
        return variables

    def get_environment_variable(self, name: str) -> Optional[str]:
        return self.store.get(name)

    def set_environment_variable(self, name: str, value: Any) -> None:
        # Declared even when an immutable store keeps the existing value.
        self.variable_names.append(name)
        self.store.set(name, coerce_value(value))

    def clear_environment_variable(self, name: str) -> None:
        self.store.clear(name)


__all__ = ["Loader", "coerce_value"]
