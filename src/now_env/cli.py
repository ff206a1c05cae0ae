"""
Command line interface for loading and checking ``now.json`` variables.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import ManifestConfig, RequirementConfig, apply_manifest, load_manifest
from .exceptions import NowEnvError


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load now.json variables and validate them")
    parser.add_argument(
        "--manifest",
        default=os.getenv("NOW_ENV_MANIFEST"),
        help="YAML manifest describing the file and the required variables",
    )
    parser.add_argument("--path", help="Directory containing the JSON file (default: current directory)")
    parser.add_argument("--file", help="JSON file name (default: now.json)")
    parser.add_argument(
        "--require",
        action="append",
        default=[],
        metavar="NAME",
        help="Variable that must be present; may be repeated",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--overload", action="store_true", help="Replace variables that are already set")
    mode.add_argument("--safe", action="store_true", help="Do not fail when the JSON file is missing")
    parser.add_argument("--verbose", action="store_true", help="Log every variable that is applied")
    return parser.parse_args(argv)


def _build_manifest(args: argparse.Namespace) -> ManifestConfig:
    manifest = load_manifest(args.manifest) if args.manifest else ManifestConfig()
    if args.path:
        manifest.path = args.path
    if args.file:
        manifest.file = args.file
    if args.overload:
        manifest.mode = "overload"
    elif args.safe:
        manifest.mode = "safe_load"
    manifest.required.extend(RequirementConfig(name=name) for name in args.require)
    return manifest


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        manifest = _build_manifest(args)
        loaded = apply_manifest(manifest)
    except NowEnvError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("\nLoaded Variables\n----------------")
    for name in loaded:
        print(name)
    if manifest.required:
        print("All required variables are valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
