# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations and normalised option records for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from ..config import ReferencePathMode
from ..constants import FORCE_REWRITE_ENV, TSCONFIG_FILENAME


class ResolverChoice(str, Enum):
    YARN = "yarn"
    PACKAGE_JSON = "package-json"


ROOT_OPTION = Annotated[
    Path,
    typer.Option(
        "--root",
        "-r",
        help="Monorepo root containing the workspace manifest.",
        show_default=False,
    ),
]
MANIFEST_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--manifest",
        "-m",
        help="Read the workspace manifest from a JSON file instead of a resolver.",
    ),
]
RESOLVER_OPTION = Annotated[
    ResolverChoice,
    typer.Option(
        "--resolver",
        help="How workspace packages are resolved when no manifest file is given.",
        case_sensitive=False,
    ),
]
CONFIG_NAME_OPTION = Annotated[
    str,
    typer.Option(
        "--config-name",
        help="Build configuration file name inside each package.",
    ),
]
FORCE_OPTION = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help=f"Rewrite every configuration even when unchanged (also {FORCE_REWRITE_ENV}).",
    ),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Report configurations that would change without writing."),
]
CHECK_OPTION = Annotated[
    bool,
    typer.Option("--check", help="Dry run that exits with status 1 when anything is out of date."),
]
LEGACY_SELF_PATHS_OPTION = Annotated[
    bool,
    typer.Option(
        "--legacy-self-paths",
        help="Reproduce legacy output that resolved every reference to '.'.",
    ),
]
JSON_OPTION = Annotated[
    bool,
    typer.Option("--json", help="Print the reference graph as JSON."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Print derived references for every unit."),
]


@dataclass(slots=True)
class SourceOptions:
    """Where the workspace manifest comes from and how configs are named."""

    root: Path
    manifest: Path | None
    resolver: str
    config_name: str
    path_mode: ReferencePathMode | None


@dataclass(slots=True)
class CompileOptions:
    """Normalised CLI inputs for the compile workflow."""

    source: SourceOptions
    force: bool
    dry_run: bool
    check: bool
    use_emoji: bool
    debug: bool


def build_source_options(
    *,
    root: Path,
    manifest: Path | None,
    resolver: ResolverChoice,
    config_name: str,
    legacy_self_paths: bool,
) -> SourceOptions:
    """Resolve paths and map flags onto :class:`SourceOptions`."""

    return SourceOptions(
        root=root.resolve(),
        manifest=manifest,
        resolver=resolver.value,
        config_name=config_name,
        path_mode=ReferencePathMode.LEGACY_SELF if legacy_self_paths else None,
    )


def build_compile_options(
    *,
    source: SourceOptions,
    force: bool,
    dry_run: bool,
    check: bool,
    emoji: bool,
    debug: bool,
) -> CompileOptions:
    """Construct ``CompileOptions`` from parsed Typer parameters.

    Args:
        source: Manifest and configuration naming options.
        force: Flag forcing a rewrite of every configuration.
        dry_run: Flag suppressing writes.
        check: Flag requesting a dry run that fails on pending changes.
        emoji: Flag controlling emoji usage in CLI output.
        debug: Flag enabling per-unit debug output.

    Returns:
        CompileOptions: Structured CLI options for the compile command.
    """

    return CompileOptions(
        source=source,
        force=force,
        dry_run=dry_run or check,
        check=check,
        use_emoji=emoji,
        debug=debug,
    )


__all__ = [
    "CHECK_OPTION",
    "CONFIG_NAME_OPTION",
    "DEBUG_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "FORCE_OPTION",
    "JSON_OPTION",
    "LEGACY_SELF_PATHS_OPTION",
    "MANIFEST_OPTION",
    "RESOLVER_OPTION",
    "ROOT_OPTION",
    "CompileOptions",
    "ResolverChoice",
    "SourceOptions",
    "build_compile_options",
    "build_source_options",
]
