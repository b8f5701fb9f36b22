# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy raised while compiling workspace references."""

from __future__ import annotations

from pathlib import Path


class ReferenceCompilerError(RuntimeError):
    """Base error for failures that must abort a compiler run."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


class ManifestError(ReferenceCompilerError):
    """Raised when the workspace manifest cannot be resolved or validated."""


class MalformedConfigError(ReferenceCompilerError):
    """Raised when a persisted build configuration cannot be interpreted."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Malformed build configuration at {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigWriteError(ReferenceCompilerError):
    """Raised when a build configuration cannot be written back to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to write build configuration {path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = [
    "ConfigWriteError",
    "MalformedConfigError",
    "ManifestError",
    "ReferenceCompilerError",
]
