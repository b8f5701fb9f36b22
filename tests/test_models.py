# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for workspace package and registry models."""

from __future__ import annotations

from pathlib import PureWindowsPath

import pytest
from pydantic import ValidationError

from tsrefs.constants import ROOT_AGGREGATE_NAME
from tsrefs.errors import ManifestError
from tsrefs.models import (
    CompileResult,
    RewriteOutcome,
    RewriteStatus,
    UnitOutcome,
    WorkspacePackage,
    WorkspaceRegistry,
    synthesize_root_aggregate,
)


def test_package_accepts_manager_alias_and_normalises_location() -> None:
    package = WorkspacePackage.model_validate(
        {
            "name": "pkg-a",
            "location": "packages\\a\\",
            "workspaceDependencies": ["pkg-b", "pkg-b", "pkg-c"],
            "mismatchedWorkspaceDependencies": [],
        },
    )
    assert package.location == "packages/a"
    assert package.dependency_names == ("pkg-b", "pkg-c")


def test_package_location_accepts_paths() -> None:
    package = WorkspacePackage(name="x", location=PureWindowsPath("packages/x"))
    assert package.location == "packages/x"


def test_empty_location_means_repository_root() -> None:
    assert WorkspacePackage(name="root", location="").location == "."


def test_package_is_immutable() -> None:
    package = WorkspacePackage(name="x", location="packages/x")
    with pytest.raises(ValidationError):
        package.location = "elsewhere"  # type: ignore[misc]


def test_registry_preserves_manifest_order(example_registry: WorkspaceRegistry) -> None:
    assert list(example_registry) == ["pkg-a", "pkg-b"]
    assert "left-pad" not in example_registry
    assert example_registry.get("left-pad") is None
    assert example_registry["pkg-b"].location == "packages/b"


def test_registry_rejects_non_object_entries() -> None:
    with pytest.raises(ManifestError, match="pkg-a"):
        WorkspaceRegistry.from_manifest({"pkg-a": "packages/a"})


def test_registry_rejects_entries_without_location() -> None:
    with pytest.raises(ManifestError, match="Invalid manifest entry"):
        WorkspaceRegistry.from_manifest({"pkg-a": {"workspaceDependencies": []}})


def test_registry_rejects_duplicate_names() -> None:
    package = WorkspacePackage(name="dup", location="a")
    with pytest.raises(ManifestError, match="Duplicate"):
        WorkspaceRegistry([package, package])


def test_root_aggregate_depends_on_every_package(example_registry: WorkspaceRegistry) -> None:
    aggregate = synthesize_root_aggregate(example_registry)
    assert aggregate.name == ROOT_AGGREGATE_NAME
    assert aggregate.location == "."
    assert aggregate.dependency_names == ("pkg-a", "pkg-b")
    assert ROOT_AGGREGATE_NAME not in example_registry


def test_compile_result_exit_code_only_fails_checks_with_pending(tmp_path) -> None:
    result = CompileResult()
    pending = RewriteOutcome(path=tmp_path / "tsconfig.json", status=RewriteStatus.PENDING)
    result.register(UnitOutcome(name="a", location="a", references=(), outcome=pending))
    assert result.exit_code() == 0
    assert result.exit_code(check=True) == 1
    assert CompileResult().exit_code(check=True) == 0
