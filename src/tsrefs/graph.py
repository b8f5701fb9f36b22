# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Derive project references from workspace dependency declarations.

A dependency becomes a reference only when it is itself a workspace package
and carries its own build configuration. Everything else, including ordinary
registry dependencies, is ignored.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterator
from pathlib import Path

from .config import CompilerSettings, ReferencePathMode
from .constants import TSCONFIG_FILENAME
from .models import WorkspacePackage, WorkspaceRegistry, synthesize_root_aggregate


def config_path_for(root: Path, location: str, config_filename: str = TSCONFIG_FILENAME) -> Path:
    """Return the build configuration path for a workspace *location*."""

    return root / location / config_filename


def reference_path(
    requester: WorkspacePackage,
    dependency: WorkspacePackage,
    *,
    mode: ReferencePathMode = ReferencePathMode.DEPENDENCY,
) -> str:
    """Return the POSIX path from *requester* to *dependency*.

    Args:
        requester: Unit whose configuration receives the reference.
        dependency: Upstream unit the reference points at.
        mode: ``LEGACY_SELF`` reproduces the historical output which resolved
            the path against the requester itself and therefore always
            yields ``"."``.

    Returns:
        str: Relative path using forward slashes on every platform.
    """

    target = requester.location if mode is ReferencePathMode.LEGACY_SELF else dependency.location
    return posixpath.relpath(target, start=requester.location)


def collect_references(
    package: WorkspacePackage,
    registry: WorkspaceRegistry,
    *,
    root: Path,
    config_filename: str = TSCONFIG_FILENAME,
    mode: ReferencePathMode = ReferencePathMode.DEPENDENCY,
) -> tuple[str, ...]:
    """Return the ordered, de-duplicated references required by *package*.

    Args:
        package: Workspace package or the root aggregate.
        registry: Read-only registry of every workspace package.
        root: Monorepo root that package locations are relative to.
        config_filename: Name of the per-package build configuration file.
        mode: Path computation mode, see :func:`reference_path`.

    Returns:
        tuple[str, ...]: Reference paths in dependency declaration order.
    """

    references: dict[str, None] = {}
    for name in package.dependency_names:
        dependency = registry.get(name)
        if dependency is None:
            continue
        if not config_path_for(root, dependency.location, config_filename).is_file():
            continue
        references.setdefault(reference_path(package, dependency, mode=mode))
    return tuple(references)


def iter_units(registry: WorkspaceRegistry) -> Iterator[WorkspacePackage]:
    """Yield every registry package followed by the root aggregate."""

    yield from registry.values()
    yield synthesize_root_aggregate(registry)


def build_reference_graph(
    registry: WorkspaceRegistry,
    *,
    root: Path,
    settings: CompilerSettings | None = None,
) -> dict[str, tuple[str, ...]]:
    """Return ``unit name -> references`` for all packages and the root aggregate."""

    resolved = settings or CompilerSettings()
    return {
        unit.name: collect_references(
            unit,
            registry,
            root=root,
            config_filename=resolved.config_filename,
            mode=resolved.path_mode,
        )
        for unit in iter_units(registry)
    }


__all__ = [
    "build_reference_graph",
    "collect_references",
    "config_path_for",
    "iter_units",
    "reference_path",
]
