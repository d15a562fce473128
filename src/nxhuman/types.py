"""Shared data types for the nxhuman installer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Sequence

from nxhuman.errors import ConflictError, InstallerError, WriteError

__all__ = [
    "FileSpec",
    "InstallPlan",
    "InstallRequest",
    "RunResult",
    "RunStatus",
    "WriteOutcome",
    "WriteStatus",
]


@dataclass(frozen=True)
class InstallRequest:
    """Immutable input to a single installer run.

    Attributes:
        project_root: Absolute path of the target project.
        non_interactive: True when no prompts may be shown.
        dry_run: Compute and report the plan without touching the filesystem.
        force_overwrite: Replace pre-existing files instead of blocking.
        platform: Platform identifier, or None for the minimal variant.
    """

    project_root: Path
    non_interactive: bool = False
    dry_run: bool = False
    force_overwrite: bool = False
    platform: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.project_root.is_absolute():
            raise ValueError(f"project_root must be absolute: {self.project_root}")


@dataclass(frozen=True)
class FileSpec:
    """One planned write.

    Attributes:
        destination: Absolute destination path.
        content: Bytes to write, resolved before any write begins.
        required: Whether an unreadable source aborts the run.
        name: Logical template name, used for progress output.
    """

    destination: Path
    content: bytes
    required: bool = True
    name: str = ""

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.destination.is_absolute():
            raise ValueError(f"destination must be absolute: {self.destination}")


@dataclass(frozen=True)
class InstallPlan:
    """Ordered, duplicate-free sequence of FileSpecs."""

    files: tuple[FileSpec, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants."""
        seen: set[Path] = set()
        for spec in self.files:
            if spec.destination in seen:
                raise ValueError(f"Duplicate destination in plan: {spec.destination}")
            seen.add(spec.destination)

    @classmethod
    def of(cls, files: Sequence[FileSpec]) -> InstallPlan:
        return cls(files=tuple(files))

    @property
    def destinations(self) -> list[Path]:
        return [spec.destination for spec in self.files]

    def replace(self, spec: FileSpec) -> InstallPlan:
        """Return a plan with the spec for the same destination swapped in place."""
        return InstallPlan(
            tuple(spec if s.destination == spec.destination else s for s in self.files)
        )

    def __iter__(self) -> Iterator[FileSpec]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)


class WriteStatus(str, Enum):
    """Per-file result."""

    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class WriteOutcome:
    """Result of writing a single file.

    Attributes:
        path: Destination path.
        status: Written, skipped (dry run) or failed.
        error: The write error (FAILED only).
    """

    path: Path
    status: WriteStatus
    error: WriteError | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.status is WriteStatus.FAILED and self.error is None:
            raise ValueError("status=FAILED requires error")
        if self.status is not WriteStatus.FAILED and self.error is not None:
            raise ValueError(f"status={self.status.name} but error is set")

    @classmethod
    def written(cls, path: Path) -> WriteOutcome:
        return cls(path, WriteStatus.WRITTEN)

    @classmethod
    def skipped(cls, path: Path) -> WriteOutcome:
        return cls(path, WriteStatus.SKIPPED)

    @classmethod
    def failed(cls, path: Path, error: WriteError) -> WriteOutcome:
        return cls(path, WriteStatus.FAILED, error)

    @property
    def ok(self) -> bool:
        return self.status is not WriteStatus.FAILED


class RunStatus(str, Enum):
    """Terminal outcome of a run."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    BLOCKED = "blocked"
    DRY_RUN = "dry-run"
    FAILED = "failed"


_SUCCESS_STATUSES = frozenset({RunStatus.COMPLETED, RunStatus.CANCELLED, RunStatus.DRY_RUN})


@dataclass(frozen=True)
class RunResult:
    """The single externally observable summary of a run.

    Use the class-method constructors; each variant fills only its own fields.

    Attributes:
        status: Which terminal state the run reached.
        written: Paths written (COMPLETED, or before the failure for FAILED).
        conflicts: Pre-existing candidate paths (BLOCKED, DRY_RUN).
        planned: Paths that would be written (DRY_RUN).
        outcomes: Per-file outcomes in plan order, for attempted files only.
        migrated: Legacy context file merged into the new context file
            (COMPLETED), or that would be (DRY_RUN).
        error: The fatal error (BLOCKED, FAILED).
    """

    status: RunStatus
    written: tuple[Path, ...] = ()
    conflicts: tuple[Path, ...] = ()
    planned: tuple[Path, ...] = ()
    outcomes: tuple[WriteOutcome, ...] = field(default=())
    error: InstallerError | None = None
    migrated: Path | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.status is RunStatus.FAILED and self.error is None:
            raise ValueError("status=FAILED requires error")
        if self.status in _SUCCESS_STATUSES and self.error is not None:
            raise ValueError(f"status={self.status.name} but error is set")

    @classmethod
    def completed(
        cls,
        written: Sequence[Path],
        outcomes: Sequence[WriteOutcome],
        migrated: Path | None = None,
    ) -> RunResult:
        return cls(
            RunStatus.COMPLETED,
            written=tuple(written),
            outcomes=tuple(outcomes),
            migrated=migrated,
        )

    @classmethod
    def cancelled(cls) -> RunResult:
        return cls(RunStatus.CANCELLED)

    @classmethod
    def blocked(cls, conflicts: Sequence[Path]) -> RunResult:
        return cls(
            RunStatus.BLOCKED,
            conflicts=tuple(conflicts),
            error=ConflictError(conflicts),
        )

    @classmethod
    def dry_run(
        cls,
        planned: Sequence[Path],
        conflicts: Sequence[Path] = (),
        outcomes: Sequence[WriteOutcome] = (),
        migrated: Path | None = None,
    ) -> RunResult:
        return cls(
            RunStatus.DRY_RUN,
            planned=tuple(planned),
            conflicts=tuple(conflicts),
            outcomes=tuple(outcomes),
            migrated=migrated,
        )

    @classmethod
    def failed(
        cls,
        error: InstallerError,
        written: Sequence[Path] = (),
        outcomes: Sequence[WriteOutcome] = (),
    ) -> RunResult:
        return cls(
            RunStatus.FAILED,
            written=tuple(written),
            outcomes=tuple(outcomes),
            error=error,
        )

    @property
    def succeeded(self) -> bool:
        """True for COMPLETED, DRY_RUN and CANCELLED."""
        return self.status in _SUCCESS_STATUSES

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1
