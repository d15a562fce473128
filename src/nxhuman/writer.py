"""Atomic single-file writes."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from nxhuman.errors import WriteError
from nxhuman.protocols import FileSystem
from nxhuman.types import WriteOutcome

logger = logging.getLogger(__name__)


def temp_path_for(path: Path) -> Path:
    """Sibling temporary path for a destination.

    The random token keeps it distinct from every planned destination and
    from concurrent temp files for the same destination.
    """
    return path.with_name(f"{path.name}.tmp-{uuid.uuid4().hex}")


class AtomicWriter:
    """Writes files through a temp file and rename.

    A reader never observes a partially written destination, and a failed
    write leaves no temp file behind.
    """

    def __init__(self, filesystem: FileSystem, dry_run: bool = False) -> None:
        """Initialize writer.

        Args:
            filesystem: Filesystem abstraction.
            dry_run: Report SKIPPED and never touch the filesystem.
        """
        self.fs = filesystem
        self.dry_run = dry_run

    def write(self, path: Path, content: bytes, force_allowed: bool = False) -> WriteOutcome:
        """Write content to path atomically.

        Args:
            path: Destination path.
            content: Exact bytes to write.
            force_allowed: Whether an existing destination may be replaced.

        Returns:
            WRITTEN on success, SKIPPED in dry-run, FAILED with a WriteError otherwise.
        """
        if self.dry_run:
            logger.debug("Dry run: would write %s", path)
            return WriteOutcome.skipped(path)

        try:
            self.fs.mkdir(path.parent, parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Cannot create directory %s: %s", path.parent, e)
            return WriteOutcome.failed(path, WriteError(path, e))

        # Re-checked here in case a file appeared after the run-level scan
        if self.fs.exists(path) and not force_allowed:
            return WriteOutcome.failed(
                path, WriteError(path, "file exists; use --force to overwrite")
            )

        temp_path = temp_path_for(path)
        try:
            self.fs.write_bytes(temp_path, content)
            self.fs.replace(temp_path, path)
        except OSError as e:
            self._discard(temp_path)
            logger.debug("Write failed for %s: %s", path, e)
            return WriteOutcome.failed(path, WriteError(path, e))

        logger.debug("Wrote %s (%d bytes)", path, len(content))
        return WriteOutcome.written(path)

    def _discard(self, temp_path: Path) -> None:
        """Best-effort removal of a temp file after a failed write."""
        try:
            if self.fs.exists(temp_path):
                self.fs.unlink(temp_path)
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", temp_path, e)
