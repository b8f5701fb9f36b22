# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drive reference derivation and configuration rewrites across a workspace."""

from __future__ import annotations

from pathlib import Path

from .config import CompilerSettings
from .graph import collect_references, config_path_for, iter_units
from .logging import info, ok, warn
from .manifest import WorkspaceManifestReader, resolve_registry
from .models import CompileResult, RewriteStatus, UnitOutcome, WorkspacePackage, WorkspaceRegistry
from .tsconfig import configure_build_config


class ReferenceCompiler:
    """Materialise project references for every workspace package and the root."""

    def __init__(
        self,
        root: Path,
        *,
        settings: CompilerSettings | None = None,
        use_emoji: bool = True,
    ) -> None:
        self._root = root
        self._settings = settings or CompilerSettings()
        self._use_emoji = use_emoji

    def compile(self, registry: WorkspaceRegistry) -> CompileResult:
        """Process each package, then the root aggregate, and collect outcomes.

        Args:
            registry: Read-only registry resolved for the workspace.

        Returns:
            CompileResult: Per-unit outcomes in processing order.

        Raises:
            ReferenceCompilerError: On the first malformed or unwritable
                configuration; later units are not processed.
        """

        result = CompileResult()
        for unit in iter_units(registry):
            result.register(self._process_unit(unit, registry))

        if self._settings.dry_run:
            ok(
                f"Dry run complete; {len(result.pending)} configuration(s) would be rewritten",
                use_emoji=self._use_emoji,
            )
        else:
            ok(
                f"Rewrote {len(result.written)} of {len(result.units)} configuration(s)",
                use_emoji=self._use_emoji,
            )
        return result

    def _process_unit(self, unit: WorkspacePackage, registry: WorkspaceRegistry) -> UnitOutcome:
        settings = self._settings
        references = collect_references(
            unit,
            registry,
            root=self._root,
            config_filename=settings.config_filename,
            mode=settings.path_mode,
        )
        outcome = configure_build_config(
            config_path_for(self._root, unit.location, settings.config_filename),
            references,
            force=settings.force_rewrite,
            dry_run=settings.dry_run,
            default_compiler_options=settings.default_compiler_options,
        )
        if outcome.status is RewriteStatus.WRITTEN:
            info(f"Updated {unit.name} ({unit.location})", use_emoji=self._use_emoji)
        elif outcome.status is RewriteStatus.PENDING:
            warn(f"DRY RUN: would update {unit.name} ({unit.location})", use_emoji=self._use_emoji)
        return UnitOutcome(
            name=unit.name,
            location=unit.location,
            references=references,
            outcome=outcome,
        )


def compile_workspace(
    root: Path,
    reader: WorkspaceManifestReader,
    *,
    settings: CompilerSettings | None = None,
    use_emoji: bool = True,
) -> CompileResult:
    """Resolve the manifest for *root* through *reader* and run the compiler."""

    registry = resolve_registry(root, reader)
    info(f"Resolved {len(registry)} workspace package(s)", use_emoji=use_emoji)
    compiler = ReferenceCompiler(root, settings=settings, use_emoji=use_emoji)
    return compiler.compile(registry)


__all__ = ["ReferenceCompiler", "compile_workspace"]
