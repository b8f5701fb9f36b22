# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command rewriting build configurations with project references."""

from __future__ import annotations

from pathlib import Path

import typer

from ...compiler import compile_workspace
from ...config import settings_from_env
from ...constants import TSCONFIG_FILENAME
from ...errors import ReferenceCompilerError
from ...models import CompileResult
from ..models import (
    CHECK_OPTION,
    CONFIG_NAME_OPTION,
    DEBUG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    FORCE_OPTION,
    LEGACY_SELF_PATHS_OPTION,
    MANIFEST_OPTION,
    RESOLVER_OPTION,
    ROOT_OPTION,
    CompileOptions,
    ResolverChoice,
    build_compile_options,
    build_source_options,
)
from ..shared import CLILogger, build_cli_logger, select_reader

compile_app = typer.Typer(
    name="compile",
    help="Write project references into every workspace build configuration.",
    add_completion=False,
)


@compile_app.callback(invoke_without_command=True)
def main(
    root: ROOT_OPTION = Path("."),
    manifest: MANIFEST_OPTION = None,
    resolver: RESOLVER_OPTION = ResolverChoice.YARN,
    config_name: CONFIG_NAME_OPTION = TSCONFIG_FILENAME,
    force: FORCE_OPTION = False,
    dry_run: DRY_RUN_OPTION = False,
    check: CHECK_OPTION = False,
    legacy_self_paths: LEGACY_SELF_PATHS_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Compile references for the workspace rooted at ``--root``.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    options = build_compile_options(
        source=build_source_options(
            root=root,
            manifest=manifest,
            resolver=resolver,
            config_name=config_name,
            legacy_self_paths=legacy_self_paths,
        ),
        force=force,
        dry_run=dry_run,
        check=check,
        emoji=emoji,
        debug=debug,
    )
    logger = build_cli_logger(emoji=options.use_emoji, debug=options.debug)
    try:
        result = _run_compile(options)
    except ReferenceCompilerError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    _emit_summary(result, options, logger=logger)
    raise typer.Exit(code=result.exit_code(check=options.check))


def _run_compile(options: CompileOptions) -> CompileResult:
    source = options.source
    settings = settings_from_env(
        config_filename=source.config_name,
        force_rewrite=options.force,
        dry_run=options.dry_run,
        path_mode=source.path_mode,
    )
    reader = select_reader(source.resolver, source.manifest)
    return compile_workspace(source.root, reader, settings=settings, use_emoji=options.use_emoji)


def _emit_summary(result: CompileResult, options: CompileOptions, *, logger: CLILogger) -> None:
    for unit in result.units:
        references = ", ".join(unit.references) or "-"
        logger.debug(
            f"unit={unit.name} location={unit.location} "
            f"status={unit.outcome.status.value} references={references}",
        )
    if result.missing:
        logger.debug(f"skipped {len(result.missing)} unit(s) without a build configuration")
    if options.check and result.pending:
        stale = ", ".join(unit.location for unit in result.pending)
        logger.fail(f"Project references are out of date: {stale}")
    elif options.check:
        logger.ok("Project references are up to date")


def register(app: typer.Typer) -> None:
    """Register the compile command on ``app``."""

    app.add_typer(compile_app, name="compile")


__all__ = ["compile_app", "register"]
