# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace manifest readers.

A reader turns a monorepo root into the mapping the package manager reports
for its workspaces::

    {"pkg-a": {"location": "packages/a", "workspaceDependencies": ["pkg-b"]}}
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Final, Protocol

from .constants import ALWAYS_EXCLUDE_DIRS, DEPENDENCY_SECTIONS, PACKAGE_MANIFEST
from .errors import ManifestError
from .models import WorkspaceRegistry
from .process_utils import run_command

CommandRunner = Callable[[Sequence[str], Path | None], Any]
Manifest = dict[str, dict[str, Any]]

YARN_WORKSPACES_INFO: Final[tuple[str, ...]] = ("yarn", "--silent", "workspaces", "info")


class WorkspaceManifestReader(Protocol):
    name: str

    def read(self, root: Path) -> Mapping[str, Any]: ...


def _default_runner(args: Sequence[str], cwd: Path | None) -> Any:
    return run_command(args, cwd=cwd)


def parse_manifest(text: str, *, source: str) -> Mapping[str, Any]:
    """Decode a JSON workspace manifest produced by *source*."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{source} did not produce valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ManifestError(f"{source} must produce a JSON object keyed by package name")
    return payload


class YarnWorkspacesReader:
    """Ask yarn for its resolved workspace graph."""

    name = "yarn"

    def __init__(
        self,
        *,
        runner: CommandRunner | None = None,
        command: Sequence[str] = YARN_WORKSPACES_INFO,
    ) -> None:
        self._runner = runner or _default_runner
        self._command = tuple(command)

    def read(self, root: Path) -> Mapping[str, Any]:
        display = " ".join(self._command)
        try:
            completed = self._runner(self._command, root)
        except FileNotFoundError as exc:
            raise ManifestError(f"Unable to run '{display}': {exc}") from exc
        if completed.returncode != 0:
            detail = (getattr(completed, "stderr", None) or "").strip() or "<no output>"
            raise ManifestError(
                f"'{display}' failed with exit code {completed.returncode}: {detail}",
            )
        return parse_manifest(completed.stdout or "", source=f"'{display}'")


class ManifestFileReader:
    """Read a previously captured manifest from a JSON file."""

    name = "file"

    def __init__(self, path: Path) -> None:
        self._path = path

    def read(self, root: Path) -> Mapping[str, Any]:
        path = self._path if self._path.is_absolute() else root / self._path
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestError(f"Workspace manifest {path} is not valid UTF-8") from exc
        except OSError as exc:
            raise ManifestError(f"Unable to read workspace manifest {path}: {exc}") from exc
        return parse_manifest(text, source=str(path))


class PackageJsonWorkspaceReader:
    """Discover workspaces from the root ``package.json`` without a package manager.

    Every dependency section of each member is reported; names that are not
    workspace packages are filtered out later when references are built.
    """

    name = "package-json"

    def read(self, root: Path) -> Mapping[str, Any]:
        patterns = _workspace_patterns(_load_package_json(root / PACKAGE_MANIFEST), root)
        includes = [pattern for pattern in patterns if not pattern.startswith("!")]
        excludes = [pattern[1:] for pattern in patterns if pattern.startswith("!")]

        manifest: Manifest = {}
        for directory in self._discover(root, includes, excludes):
            data = _load_package_json(directory / PACKAGE_MANIFEST)
            name = data.get("name")
            if not isinstance(name, str) or not name:
                continue
            if name in manifest:
                raise ManifestError(f"Duplicate workspace package name {name!r}")
            dependencies: list[str] = []
            for section in DEPENDENCY_SECTIONS:
                block = data.get(section)
                if isinstance(block, Mapping):
                    dependencies.extend(str(key) for key in block)
            manifest[name] = {
                "location": directory.relative_to(root).as_posix(),
                "workspaceDependencies": list(dict.fromkeys(dependencies)),
            }
        return manifest

    @staticmethod
    def _discover(root: Path, includes: Sequence[str], excludes: Sequence[str]) -> list[Path]:
        found: dict[Path, None] = {}
        for pattern in includes:
            cleaned = pattern.strip().rstrip("/")
            if cleaned in {"", "."}:
                continue
            try:
                candidates = sorted(root.glob(cleaned))
            except ValueError as exc:
                raise ManifestError(f"Unsupported workspace pattern {pattern!r}: {exc}") from exc
            for candidate in candidates:
                if not (candidate / PACKAGE_MANIFEST).is_file():
                    continue
                relative = candidate.relative_to(root)
                if ALWAYS_EXCLUDE_DIRS.intersection(relative.parts):
                    continue
                if any(fnmatch(relative.as_posix(), exclude.rstrip("/")) for exclude in excludes):
                    continue
                found.setdefault(candidate)
        return list(found)


def _load_package_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ManifestError(f"{path} is not valid UTF-8") from exc
    except OSError as exc:
        raise ManifestError(f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{path} is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def _workspace_patterns(data: Mapping[str, Any], root: Path) -> list[str]:
    workspaces = data.get("workspaces")
    if isinstance(workspaces, Mapping):
        workspaces = workspaces.get("packages")
    if workspaces is None:
        raise ManifestError(f"{root / PACKAGE_MANIFEST} does not declare any workspaces")
    if not isinstance(workspaces, list) or not all(isinstance(item, str) for item in workspaces):
        raise ManifestError(f"'workspaces' in {root / PACKAGE_MANIFEST} must be a list of globs")
    return list(workspaces)


READERS: Final[dict[str, Callable[[], WorkspaceManifestReader]]] = {
    YarnWorkspacesReader.name: YarnWorkspacesReader,
    PackageJsonWorkspaceReader.name: PackageJsonWorkspaceReader,
}


def reader_for(name: str) -> WorkspaceManifestReader:
    """Return a reader instance registered under *name*."""

    try:
        factory = READERS[name]
    except KeyError as exc:
        known = ", ".join(sorted(READERS))
        raise ManifestError(f"Unknown workspace resolver {name!r} (expected one of: {known})") from exc
    return factory()


def resolve_registry(root: Path, reader: WorkspaceManifestReader) -> WorkspaceRegistry:
    """Resolve the manifest for *root* and wrap it in a read-only registry."""

    return WorkspaceRegistry.from_manifest(reader.read(root))


__all__ = [
    "READERS",
    "YARN_WORKSPACES_INFO",
    "CommandRunner",
    "ManifestFileReader",
    "PackageJsonWorkspaceReader",
    "WorkspaceManifestReader",
    "YarnWorkspacesReader",
    "parse_manifest",
    "reader_for",
    "resolve_registry",
]
