# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime settings for the reference compiler."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import FALSY_ENV_VALUES, FORCE_REWRITE_ENV, TSCONFIG_FILENAME
from .errors import ReferenceCompilerError


class ConfigError(ReferenceCompilerError):
    """Raised when compiler settings are invalid."""


class ReferencePathMode(Enum):
    """Select how reference paths are computed for a dependency."""

    DEPENDENCY = "dependency"
    # Legacy output resolved each path relative to the requester itself.
    LEGACY_SELF = "legacy-self"


def default_compiler_options() -> dict[str, Any]:
    """Return the ``compilerOptions`` block synthesised for bare configs."""

    return {"composite": True, "rootDir": "src", "outDir": "lib"}


class CompilerSettings(BaseModel):
    """Options shared by every unit processed during a compiler run."""

    model_config = ConfigDict(frozen=True)

    config_filename: str = TSCONFIG_FILENAME
    force_rewrite: bool = False
    dry_run: bool = False
    path_mode: ReferencePathMode = ReferencePathMode.DEPENDENCY
    default_compiler_options: dict[str, Any] = Field(default_factory=default_compiler_options)

    @field_validator("config_filename")
    @classmethod
    def _validate_filename(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate or "/" in candidate or "\\" in candidate:
            raise ValueError(f"config filename must be a bare file name, got {value!r}")
        return candidate


def env_flag(env: Mapping[str, str], name: str) -> bool:
    """Return ``True`` when *name* is set to a non-falsy value in *env*."""

    value = env.get(name)
    if value is None:
        return False
    return value.strip().lower() not in FALSY_ENV_VALUES


def settings_from_env(
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> CompilerSettings:
    """Build :class:`CompilerSettings` layering *overrides* over the environment.

    Args:
        env: Environment mapping consulted for ``TSREFS_FORCE_REWRITE``.
            Defaults to :data:`os.environ`.
        **overrides: Explicit field values; ``None`` entries are ignored.

    Returns:
        CompilerSettings: Validated settings for the run.

    Raises:
        ConfigError: If the combined values fail validation.
    """

    environment = os.environ if env is None else env
    payload: dict[str, Any] = {}
    if env_flag(environment, FORCE_REWRITE_ENV):
        payload["force_rewrite"] = True
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "force_rewrite":
            payload[key] = bool(value) or payload.get(key, False)
            continue
        payload[key] = value
    try:
        return CompilerSettings(**payload)
    except ValueError as exc:
        raise ConfigError(f"Invalid compiler settings: {exc}") from exc


__all__ = [
    "CompilerSettings",
    "ConfigError",
    "ReferencePathMode",
    "default_compiler_options",
    "env_flag",
    "settings_from_env",
]
