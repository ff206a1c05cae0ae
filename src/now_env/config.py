"""
Validation manifest loading: which file to load and which variables to require.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .exceptions import ConfigError
from .facade import DEFAULT_FILE_NAME, NowEnv
from .store import EnvironmentStore

LOAD_MODES = ("load", "overload", "safe_load")


@dataclass
class RequirementConfig:
    """Assertions to run against one required variable."""

    name: str
    not_empty: bool = False
    integer: bool = False
    boolean: bool = False
    allowed_values: List[str] | None = None


@dataclass
class ManifestConfig:
    """Top-level manifest consumed by ``apply_manifest`` and the CLI."""

    path: str = "."
    file: str = DEFAULT_FILE_NAME
    mode: str = "load"
    required: List[RequirementConfig] = field(default_factory=list)


def _require(dictionary: Dict[str, Any], key: str) -> Any:
    if key not in dictionary:
        raise ConfigError(f"Missing required manifest key: {key}")
    return dictionary[key]


def _load_requirements(raw_requirements: Any) -> List[RequirementConfig]:
    if not isinstance(raw_requirements, list):
        raise ConfigError("Manifest key 'required' must be a list")

    requirements = []
    for entry in raw_requirements:
        if isinstance(entry, str):
            requirements.append(RequirementConfig(name=entry))
            continue
        if not isinstance(entry, dict):
            raise ConfigError(f"Invalid requirement entry: {entry}")

        choices = entry.get("allowed_values")
        if choices is not None and not isinstance(choices, list):
            raise ConfigError(f"allowed_values must be a list in requirement: {entry}")

        requirements.append(
            RequirementConfig(
                name=str(_require(entry, "name")),
                not_empty=bool(entry.get("not_empty", False)),
                integer=bool(entry.get("integer", False)),
                boolean=bool(entry.get("boolean", False)),
                allowed_values=[str(choice) for choice in choices] if choices is not None else None,
            )
        )
    return requirements


def load_manifest(path: str | Path) -> ManifestConfig:
    """Load ManifestConfig from a YAML file."""

    manifest_path = Path(path)
    if not manifest_path.exists():
        raise ConfigError(f"Manifest file not found: {path}")

    with manifest_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Manifest is not valid YAML: {path}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Manifest must be a mapping: {path}")

    mode = str(raw.get("mode", "load"))
    if mode not in LOAD_MODES:
        raise ConfigError(f"Unsupported load mode: {mode}")

    return ManifestConfig(
        path=str(raw.get("path", ".")),
        file=str(raw.get("file", DEFAULT_FILE_NAME)),
        mode=mode,
        required=_load_requirements(raw.get("required", [])),
    )


def apply_manifest(manifest: ManifestConfig, store: EnvironmentStore | None = None) -> List[str]:
    """Load the configured file and run every requirement; return the loaded names."""

    nowenv = NowEnv(manifest.path, manifest.file, store=store)
    loaded = getattr(nowenv, manifest.mode)()

    for requirement in manifest.required:
        validator = nowenv.required(requirement.name)
        if requirement.not_empty:
            validator.not_empty()
        if requirement.integer:
            validator.is_integer()
        if requirement.boolean:
            validator.is_boolean()
        if requirement.allowed_values is not None:
            validator.allowed_values(requirement.allowed_values)
    return loaded


__all__ = [
    "LOAD_MODES",
    "ManifestConfig",
    "RequirementConfig",
    "apply_manifest",
    "load_manifest",
]
