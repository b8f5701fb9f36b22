# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tsrefs.constants import FORCE_REWRITE_ENV
from tsrefs.models import WorkspaceRegistry

JsonWriter = Callable[[Path, Any], Path]

EXAMPLE_MANIFEST: dict[str, dict[str, Any]] = {
    "pkg-a": {"location": "packages/a", "workspaceDependencies": ["pkg-b", "left-pad"]},
    "pkg-b": {"location": "packages/b", "workspaceDependencies": []},
}


@pytest.fixture(autouse=True)
def _clear_force_rewrite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(FORCE_REWRITE_ENV, raising=False)


@pytest.fixture
def write_json() -> JsonWriter:
    """Return a helper writing ``payload`` as JSON, creating parent directories."""

    def _write(path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def example_workspace(tmp_path: Path, write_json: JsonWriter) -> Path:
    """Create the two-package workspace with empty build configurations."""

    write_json(tmp_path / "packages" / "a" / "tsconfig.json", {})
    write_json(tmp_path / "packages" / "b" / "tsconfig.json", {})
    write_json(tmp_path / "tsconfig.json", {})
    write_json(tmp_path / "workspaces.json", EXAMPLE_MANIFEST)
    return tmp_path


@pytest.fixture
def example_registry() -> WorkspaceRegistry:
    return WorkspaceRegistry.from_manifest(EXAMPLE_MANIFEST)


@pytest.fixture
def read_json() -> Callable[[Path], Any]:
    """Return a helper decoding the JSON document at a path."""

    def _read(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read
