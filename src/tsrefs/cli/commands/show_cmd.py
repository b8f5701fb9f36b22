# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing the derived reference graph without writing files."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from ...config import settings_from_env
from ...constants import TSCONFIG_FILENAME
from ...errors import ReferenceCompilerError
from ...graph import build_reference_graph, iter_units
from ...manifest import resolve_registry
from ..models import (
    CONFIG_NAME_OPTION,
    EMOJI_OPTION,
    JSON_OPTION,
    LEGACY_SELF_PATHS_OPTION,
    MANIFEST_OPTION,
    RESOLVER_OPTION,
    ROOT_OPTION,
    ResolverChoice,
    build_source_options,
)
from ..shared import build_cli_logger, select_reader

show_app = typer.Typer(
    name="show",
    help="Print the references each workspace unit would receive.",
    add_completion=False,
)


@show_app.callback(invoke_without_command=True)
def main(
    root: ROOT_OPTION = Path("."),
    manifest: MANIFEST_OPTION = None,
    resolver: RESOLVER_OPTION = ResolverChoice.YARN,
    config_name: CONFIG_NAME_OPTION = TSCONFIG_FILENAME,
    legacy_self_paths: LEGACY_SELF_PATHS_OPTION = False,
    as_json: JSON_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Render the reference graph for the workspace rooted at ``--root``."""

    source = build_source_options(
        root=root,
        manifest=manifest,
        resolver=resolver,
        config_name=config_name,
        legacy_self_paths=legacy_self_paths,
    )
    logger = build_cli_logger(emoji=emoji)
    try:
        settings = settings_from_env(config_filename=source.config_name, path_mode=source.path_mode)
        registry = resolve_registry(source.root, select_reader(source.resolver, source.manifest))
    except ReferenceCompilerError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    graph = build_reference_graph(registry, root=source.root, settings=settings)
    if as_json:
        logger.echo(json.dumps({name: list(paths) for name, paths in graph.items()}, indent=2))
        raise typer.Exit(code=0)

    table = Table(title="Project references")
    table.add_column("Unit")
    table.add_column("Location")
    table.add_column("References")
    for unit in iter_units(registry):
        table.add_row(unit.name, unit.location, "\n".join(graph[unit.name]) or "-")
    logger.console.print(table)
    raise typer.Exit(code=0)


def register(app: typer.Typer) -> None:
    """Register the show command on ``app``."""

    app.add_typer(show_app, name="show")


__all__ = ["register", "show_app"]
