"""Installer error taxonomy.

Errors are carried as values inside WriteOutcome and RunResult. Only the
request boundary raises them (ConfigurationError from platform selection).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence


class InstallerError(Exception):
    """Base exception for installer operations."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message.
            context: Optional dict with additional context (paths, causes).
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConfigurationError(InstallerError):
    """Invalid or missing required selection."""

    def __init__(self, value: str, choices: Sequence[str], what: str = "platform") -> None:
        self.value = value
        self.choices = list(choices)
        super().__init__(
            f"Invalid --{what} '{value}'. Valid choices: {', '.join(self.choices)}",
            {"value": value, "choices": self.choices},
        )


class ConflictError(InstallerError):
    """Pre-existing files detected without permission to overwrite."""

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = list(paths)
        listing = ", ".join(str(p) for p in self.paths)
        super().__init__(
            f"Detected existing nxHuman files: {listing}. "
            "Use --force to overwrite or --dry-run to preview.",
            {"paths": [str(p) for p in self.paths]},
        )


class SourceUnavailableError(InstallerError):
    """A required template could not be read."""

    def __init__(self, source: str, cause: BaseException | str) -> None:
        self.source = source
        self.cause = cause
        super().__init__(
            f"Framework file not found or unreadable: {source} ({cause})",
            {"source": source},
        )


class ContextParseError(InstallerError):
    """The legacy context file exists but is not a JSON object."""

    def __init__(self, path: Path, cause: BaseException | str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(
            f"Cannot parse legacy context file {path}: {cause}. "
            "Fix or move it before installing.",
            {"path": str(path)},
        )


class WriteError(InstallerError):
    """A file failed during the write-temp-then-rename sequence."""

    def __init__(
        self,
        path: Path,
        cause: BaseException | str,
        written: Sequence[Path] = (),
    ) -> None:
        self.path = path
        self.cause = cause
        self.written = list(written)
        super().__init__(
            f"Failed to write {path}: {cause}",
            {"path": str(path), "written": [str(p) for p in self.written]},
        )

    def with_written(self, written: Sequence[Path]) -> WriteError:
        """Return a copy that records the files written before this failure."""
        return WriteError(self.path, self.cause, written)
