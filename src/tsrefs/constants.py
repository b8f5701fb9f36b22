# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for the reference compiler."""

from __future__ import annotations

from typing import Final

TSCONFIG_FILENAME: Final[str] = "tsconfig.json"
PACKAGE_MANIFEST: Final[str] = "package.json"
ROOT_LOCATION: Final[str] = "."
ROOT_AGGREGATE_NAME: Final[str] = "<root>"

FORCE_REWRITE_ENV: Final[str] = "TSREFS_FORCE_REWRITE"
FALSY_ENV_VALUES: Final[frozenset[str]] = frozenset({"", "0", "false", "no", "off"})

COMPILER_OPTIONS_KEY: Final[str] = "compilerOptions"
COMPOSITE_KEY: Final[str] = "composite"
REFERENCES_KEY: Final[str] = "references"
REFERENCE_PATH_KEY: Final[str] = "path"

DEPENDENCY_SECTIONS: Final[tuple[str, ...]] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)
ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset({"node_modules", ".git", ".hg", ".svn"})

__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "COMPILER_OPTIONS_KEY",
    "COMPOSITE_KEY",
    "DEPENDENCY_SECTIONS",
    "FALSY_ENV_VALUES",
    "FORCE_REWRITE_ENV",
    "PACKAGE_MANIFEST",
    "REFERENCES_KEY",
    "REFERENCE_PATH_KEY",
    "ROOT_AGGREGATE_NAME",
    "ROOT_LOCATION",
    "TSCONFIG_FILENAME",
]
