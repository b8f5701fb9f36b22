# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Thin wrapper around ``subprocess`` for package manager queries."""

from __future__ import annotations

import shutil

# Bandit: the only commands issued are fixed package manager invocations passed
# as argument lists without shell expansion.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path


class CommandNotFoundError(FileNotFoundError):
    """Raised when the requested executable cannot be located on ``PATH``."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable '{executable}' was not found on PATH")
        self.executable = executable


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise CommandNotFoundError(head)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run *args* in *cwd* capturing text output without raising on failure.

    Args:
        args: Command and arguments; the executable is resolved via ``PATH``.
        cwd: Working directory for the child process.

    Returns:
        subprocess.CompletedProcess[str]: Completed process with captured
        ``stdout`` and ``stderr``.

    Raises:
        CommandNotFoundError: If the executable cannot be located.
    """

    normalized = _normalize_args(args)
    # Bandit: argument lists only, no shell.
    return subprocess.run(  # nosec B603
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        check=False,
        capture_output=True,
        text=True,
        stdin=subprocess.DEVNULL,
    )


__all__ = ["CommandNotFoundError", "run_command"]
