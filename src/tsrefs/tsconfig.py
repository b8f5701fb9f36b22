# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read-modify-write support for persisted build configurations.

The rewriter only ever adds: it enables composite builds and appends missing
references while leaving every other key, and every existing reference, in
place. Files are written only when their content changes unless a rewrite is
forced.
"""

from __future__ import annotations

import copy
import json
import posixpath
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .config import default_compiler_options as _default_options
from .constants import (
    COMPILER_OPTIONS_KEY,
    COMPOSITE_KEY,
    REFERENCE_PATH_KEY,
    REFERENCES_KEY,
)
from .errors import ConfigWriteError, MalformedConfigError, ReferenceCompilerError
from .models import RewriteOutcome, RewriteStatus

JsonObject = dict[str, Any]


def read_build_config(path: Path) -> JsonObject:
    """Parse the JSON document stored at *path*.

    Args:
        path: Location of an existing build configuration.

    Returns:
        JsonObject: Parsed top-level object.

    Raises:
        MalformedConfigError: If the content is not a UTF-8 encoded JSON object.
        ReferenceCompilerError: If the file cannot be read.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedConfigError(path, f"not valid UTF-8 (byte offset {exc.start})") from exc
    except OSError as exc:
        raise ReferenceCompilerError(f"Unable to read build configuration {path}: {exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        reason = f"invalid JSON ({exc.msg} at line {exc.lineno} column {exc.colno})"
        raise MalformedConfigError(path, reason) from exc
    if not isinstance(document, dict):
        raise MalformedConfigError(path, "top-level value must be an object")
    return document


def render_build_config(document: Mapping[str, Any]) -> str:
    """Serialise *document* with two-space indentation and a trailing newline."""

    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _reference_key(value: str) -> str:
    return posixpath.normpath(value.replace("\\", "/"))


def ensure_composite(
    document: JsonObject,
    path: Path,
    *,
    defaults: Mapping[str, Any] | None = None,
) -> bool:
    """Force ``compilerOptions.composite`` to ``true``; return whether it changed."""

    options = document.get(COMPILER_OPTIONS_KEY)
    if options is None:
        block = copy.deepcopy(dict(defaults if defaults is not None else _default_options()))
        block[COMPOSITE_KEY] = True
        document[COMPILER_OPTIONS_KEY] = block
        return True
    if not isinstance(options, dict):
        raise MalformedConfigError(path, f"'{COMPILER_OPTIONS_KEY}' must be an object")
    if options.get(COMPOSITE_KEY) is True:
        return False
    if COMPOSITE_KEY in options:
        options[COMPOSITE_KEY] = True
    else:
        document[COMPILER_OPTIONS_KEY] = {COMPOSITE_KEY: True, **options}
    return True


def merge_references(
    document: JsonObject,
    references: Iterable[str],
    path: Path,
) -> tuple[tuple[str, ...], int]:
    """Append missing *references* to ``document["references"]``.

    Existing entries keep their position and any extra keys they carry.
    Entries pointing at the same path are collapsed onto the first one.

    Args:
        document: Parsed configuration, updated in place.
        references: Reference paths that must be present.
        path: Configuration path used for error reporting.

    Returns:
        tuple[tuple[str, ...], int]: Added paths and the number of duplicate
        entries dropped.

    Raises:
        MalformedConfigError: If ``references`` is not a list of objects with
            a string ``path``.
    """

    existing = document.get(REFERENCES_KEY)
    if existing is not None and not isinstance(existing, list):
        raise MalformedConfigError(path, f"'{REFERENCES_KEY}' must be a list")

    merged: dict[str, Any] = {}
    duplicates = 0
    for entry in existing or []:
        if not isinstance(entry, dict) or not isinstance(entry.get(REFERENCE_PATH_KEY), str):
            raise MalformedConfigError(
                path,
                f"each '{REFERENCES_KEY}' entry must be an object with a string '{REFERENCE_PATH_KEY}'",
            )
        key = _reference_key(entry[REFERENCE_PATH_KEY])
        if key in merged:
            duplicates += 1
            continue
        merged[key] = entry

    added: list[str] = []
    for reference in references:
        key = _reference_key(reference)
        if key in merged:
            continue
        merged[key] = {REFERENCE_PATH_KEY: reference}
        added.append(reference)

    if isinstance(existing, list) or merged:
        document[REFERENCES_KEY] = list(merged.values())
    return tuple(added), duplicates


def configure_build_config(
    path: Path,
    references: Iterable[str],
    *,
    force: bool = False,
    dry_run: bool = False,
    default_compiler_options: Mapping[str, Any] | None = None,
) -> RewriteOutcome:
    """Ensure the configuration at *path* is composite and carries *references*.

    Args:
        path: Build configuration to update. A missing file is skipped.
        references: Reference paths that must be present after the update.
        force: Rewrite the file even when its content is unchanged.
        dry_run: Compute the outcome without touching the file.
        default_compiler_options: Block inserted when ``compilerOptions`` is
            absent; ``composite`` is always forced on.

    Returns:
        RewriteOutcome: What happened, or would happen, to the file.

    Raises:
        MalformedConfigError: If the existing document cannot be interpreted.
        ConfigWriteError: If the updated document cannot be written.
    """

    if not path.is_file():
        return RewriteOutcome(path=path, status=RewriteStatus.MISSING)

    document = read_build_config(path)
    composite_enabled = ensure_composite(document, path, defaults=default_compiler_options)
    added, duplicates = merge_references(document, references, path)
    dirty = composite_enabled or bool(added) or duplicates > 0

    if not (dirty or force):
        status = RewriteStatus.UNCHANGED
    elif dry_run:
        status = RewriteStatus.PENDING
    else:
        try:
            path.write_text(render_build_config(document), encoding="utf-8", newline="\n")
        except OSError as exc:
            raise ConfigWriteError(path, exc.strerror or str(exc)) from exc
        status = RewriteStatus.WRITTEN

    return RewriteOutcome(
        path=path,
        status=status,
        added=added,
        composite_enabled=composite_enabled,
        duplicates_removed=duplicates,
    )


__all__ = [
    "configure_build_config",
    "ensure_composite",
    "merge_references",
    "read_build_config",
    "render_build_config",
]
