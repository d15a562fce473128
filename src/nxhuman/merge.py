"""Migration of a legacy project context file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from nxhuman.errors import ContextParseError
from nxhuman.protocols import FileSystem

logger = logging.getLogger(__name__)


def merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow overlay of two context objects.

    Keys in overlay win; keys present only in base are preserved. Neither
    argument is mutated.

    Example:
        >>> merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        {'a': 1, 'b': 3, 'c': 4}
    """
    merged = dict(base)
    merged.update(overlay)
    return merged


class ContextMerger:
    """Reads, merges and retires the legacy context file."""

    def __init__(self, filesystem: FileSystem) -> None:
        self.fs = filesystem

    def load_legacy(self, path: Path) -> dict[str, Any] | ContextParseError | None:
        """Load the legacy context file if present.

        Args:
            path: Legacy context file location.

        Returns:
            The parsed object, None if the file does not exist, or a
            ContextParseError if it exists but is not a JSON object.
        """
        if not self.fs.exists(path):
            return None
        try:
            data = json.loads(self.fs.read_text(path))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            return ContextParseError(path, e)
        if not isinstance(data, dict):
            return ContextParseError(path, f"expected a JSON object, got {type(data).__name__}")
        logger.debug("Loaded legacy context %s (%d keys)", path, len(data))
        return data

    def merge_legacy(
        self, path: Path, fresh: Mapping[str, Any]
    ) -> tuple[dict[str, Any], bool] | ContextParseError:
        """Merge the legacy file under a freshly computed context.

        Args:
            path: Legacy context file location.
            fresh: Newly computed context; its keys win.

        Returns:
            (merged context, whether a legacy file was found), or the parse error.
        """
        legacy = self.load_legacy(path)
        if isinstance(legacy, ContextParseError):
            return legacy
        if legacy is None:
            return dict(fresh), False
        return merge(legacy, fresh), True

    def retire(self, path: Path) -> None:
        """Delete the legacy file once its data lives in the new location."""
        self.fs.unlink(path)
        logger.info("Migrated legacy context file %s", path)
