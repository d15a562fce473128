"""Protocol interfaces for dependency injection.

These protocols define the seams between the installation engine and the
outside world. Production code uses the concrete implementations; tests
substitute doubles (MagicMock or small fakes) without inheritance.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nxhuman.types import InstallRequest, RunResult, WriteOutcome


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access so the engine can be exercised with
    injected failures (a rename that raises, a full disk).
    """

    def read_bytes(self, path: Path) -> bytes:
        """Read raw content from a file.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read UTF-8 text content from a file."""
        ...

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write content to a file and flush it to stable storage."""
        ...

    def replace(self, src: Path, dst: Path) -> None:
        """Atomically rename src over dst."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        ...

    def unlink(self, path: Path) -> None:
        """Remove a file."""
        ...


@runtime_checkable
class Writer(Protocol):
    """Protocol for the per-file writer used by the planner."""

    def write(self, path: Path, content: bytes, force_allowed: bool) -> WriteOutcome:
        """Write one file and report the outcome.

        Args:
            path: Destination path.
            content: Exact bytes to place at path.
            force_allowed: Whether an existing destination may be replaced.

        Returns:
            WriteOutcome describing what happened.
        """
        ...


@runtime_checkable
class Installer(Protocol):
    """Protocol for the run-level installation engine."""

    def run(
        self,
        request: InstallRequest,
        confirmed: bool = True,
        on_outcome: Callable[[WriteOutcome], None] | None = None,
    ) -> RunResult:
        """Execute one installer run.

        Args:
            request: Resolved request built at the process boundary.
            confirmed: False if the user declined the confirmation prompt.
            on_outcome: Optional callback receiving each per-file outcome.

        Returns:
            The run's single terminal result.
        """
        ...
