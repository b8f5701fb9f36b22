# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import compile_cmd, show_cmd

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register built-in commands on ``app``."""

    compile_cmd.register(app)
    show_cmd.register(app)
