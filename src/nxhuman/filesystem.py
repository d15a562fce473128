"""Filesystem abstraction for testability.

This module provides the production filesystem used by the installation
engine. RealFileSystem wraps standard library operations and satisfies the
FileSystem protocol structurally.
"""

from __future__ import annotations

import os
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path and os operations.
    """

    def read_bytes(self, path: Path) -> bytes:
        """Read raw content from a file."""
        return path.read_bytes()

    def read_text(self, path: Path) -> str:
        """Read UTF-8 text content from a file."""
        return path.read_text(encoding="utf-8")

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write content to a file and fsync it before returning."""
        with open(path, "wb") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())

    def replace(self, src: Path, dst: Path) -> None:
        """Atomically rename src over dst."""
        os.replace(src, dst)

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def unlink(self, path: Path) -> None:
        """Remove a file."""
        path.unlink()
