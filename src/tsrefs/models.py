# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace packages, the read-only registry and per-run outcome records."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import ROOT_AGGREGATE_NAME, ROOT_LOCATION
from .errors import ManifestError


def normalize_location(value: str) -> str:
    """Return *value* as a normalised POSIX location (``.`` for the root)."""

    text = value.replace("\\", "/").strip()
    if not text:
        return ROOT_LOCATION
    return posixpath.normpath(text)


class WorkspacePackage(BaseModel):
    """A workspace member as resolved by the package manager."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str
    location: str
    dependency_names: tuple[str, ...] = Field(default=(), alias="workspaceDependencies")

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: object) -> str:
        if isinstance(value, PurePath):
            value = value.as_posix()
        if not isinstance(value, str):
            raise TypeError("WorkspacePackage.location must be a string")
        return normalize_location(value)

    @field_validator("dependency_names", mode="before")
    @classmethod
    def _coerce_dependencies(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, Mapping):
            value = list(value)
        if isinstance(value, Iterable):
            return tuple(dict.fromkeys(str(entry) for entry in value))
        raise TypeError("WorkspacePackage.dependency_names must be a sequence of strings")


class WorkspaceRegistry(Mapping[str, WorkspacePackage]):
    """Read-only mapping of package name to :class:`WorkspacePackage`.

    Iteration follows the order in which the manifest listed the packages.
    """

    __slots__ = ("_packages",)

    def __init__(self, packages: Iterable[WorkspacePackage] = ()) -> None:
        entries: dict[str, WorkspacePackage] = {}
        for package in packages:
            if package.name in entries:
                raise ManifestError(f"Duplicate workspace package name {package.name!r}")
            entries[package.name] = package
        self._packages: Mapping[str, WorkspacePackage] = MappingProxyType(entries)

    @classmethod
    def from_manifest(cls, manifest: Mapping[str, Any]) -> WorkspaceRegistry:
        """Build a registry from a ``name -> {location, workspaceDependencies}`` mapping.

        Args:
            manifest: Resolved workspace manifest as produced by a reader.

        Returns:
            WorkspaceRegistry: Registry preserving the manifest order.

        Raises:
            ManifestError: If an entry is not an object or fails validation.
        """

        packages: list[WorkspacePackage] = []
        for name, entry in manifest.items():
            if not isinstance(entry, Mapping):
                raise ManifestError(f"Manifest entry for {name!r} must be an object")
            try:
                packages.append(WorkspacePackage.model_validate({**entry, "name": name}))
            except ValidationError as exc:
                raise ManifestError(f"Invalid manifest entry for {name!r}: {exc}") from exc
        return cls(packages)

    def __getitem__(self, name: str) -> WorkspacePackage:
        return self._packages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"WorkspaceRegistry({list(self._packages)!r})"


def synthesize_root_aggregate(registry: WorkspaceRegistry) -> WorkspacePackage:
    """Return the synthetic unit that depends on every workspace package."""

    return WorkspacePackage(
        name=ROOT_AGGREGATE_NAME,
        location=ROOT_LOCATION,
        dependency_names=tuple(registry),
    )


class RewriteStatus(Enum):
    MISSING = "missing"
    UNCHANGED = "unchanged"
    WRITTEN = "written"
    PENDING = "pending"


@dataclass(frozen=True, slots=True)
class RewriteOutcome:
    """Describe what the rewriter did with a single build configuration."""

    path: Path
    status: RewriteStatus
    added: tuple[str, ...] = ()
    composite_enabled: bool = False
    duplicates_removed: int = 0


@dataclass(frozen=True, slots=True)
class UnitOutcome:
    """Pair a processed unit with its derived references and rewrite outcome."""

    name: str
    location: str
    references: tuple[str, ...]
    outcome: RewriteOutcome


@dataclass(slots=True)
class CompileResult:
    """Capture the outcome of a compiler run across all units."""

    units: list[UnitOutcome] = field(default_factory=list)

    def register(self, unit: UnitOutcome) -> None:
        self.units.append(unit)

    def _with_status(self, status: RewriteStatus) -> list[UnitOutcome]:
        return [unit for unit in self.units if unit.outcome.status is status]

    @property
    def written(self) -> list[UnitOutcome]:
        return self._with_status(RewriteStatus.WRITTEN)

    @property
    def pending(self) -> list[UnitOutcome]:
        return self._with_status(RewriteStatus.PENDING)

    @property
    def missing(self) -> list[UnitOutcome]:
        return self._with_status(RewriteStatus.MISSING)

    @property
    def unchanged(self) -> list[UnitOutcome]:
        return self._with_status(RewriteStatus.UNCHANGED)

    def exit_code(self, *, check: bool = False) -> int:
        """Return ``1`` in check mode when any configuration is out of date."""

        return 1 if check and self.pending else 0


__all__ = [
    "CompileResult",
    "RewriteOutcome",
    "RewriteStatus",
    "UnitOutcome",
    "WorkspacePackage",
    "WorkspaceRegistry",
    "normalize_location",
    "synthesize_root_aggregate",
]
