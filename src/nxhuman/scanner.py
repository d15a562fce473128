"""Detection of pre-existing install artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from nxhuman.protocols import FileSystem

logger = logging.getLogger(__name__)


class ConflictScanner:
    """Reports which candidate paths already exist.

    Read-only. The scanner only reports; the planner decides whether the
    result blocks the run.
    """

    def __init__(self, filesystem: FileSystem, candidates: Iterable[Path] = ()) -> None:
        """Initialize scanner.

        Args:
            filesystem: Filesystem abstraction.
            candidates: Extra absolute paths that indicate a prior install,
                checked in addition to the paths passed to scan().
        """
        self.fs = filesystem
        self.candidates = list(candidates)

    def scan(self, paths: Iterable[Path] = ()) -> list[Path]:
        """Return the existing subset of candidates, in candidate order.

        Args:
            paths: Candidate paths for this run (typically the marker directory
                and every planned destination).

        Returns:
            Existing paths without duplicates.
        """
        seen: set[Path] = set()
        existing: list[Path] = []
        for candidate in [*paths, *self.candidates]:
            if candidate in seen:
                continue
            seen.add(candidate)
            if self.fs.exists(candidate):
                existing.append(candidate)
        if existing:
            logger.debug("Found %d existing install artifacts", len(existing))
        return existing
