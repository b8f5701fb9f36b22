# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile TypeScript project references for workspace monorepos."""

from __future__ import annotations

from .compiler import ReferenceCompiler, compile_workspace
from .config import CompilerSettings, ReferencePathMode, settings_from_env
from .errors import (
    ConfigWriteError,
    MalformedConfigError,
    ManifestError,
    ReferenceCompilerError,
)
from .graph import build_reference_graph, collect_references
from .models import (
    CompileResult,
    RewriteOutcome,
    RewriteStatus,
    WorkspacePackage,
    WorkspaceRegistry,
    synthesize_root_aggregate,
)
from .tsconfig import configure_build_config

__all__ = [
    "CompileResult",
    "CompilerSettings",
    "ConfigWriteError",
    "MalformedConfigError",
    "ManifestError",
    "ReferenceCompiler",
    "ReferenceCompilerError",
    "ReferencePathMode",
    "RewriteOutcome",
    "RewriteStatus",
    "WorkspacePackage",
    "WorkspaceRegistry",
    "build_reference_graph",
    "collect_references",
    "compile_workspace",
    "configure_build_config",
    "settings_from_env",
    "synthesize_root_aggregate",
]
