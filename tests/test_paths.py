"""Tests for the install layout."""

from __future__ import annotations

from pathlib import Path

import pytest

from nxhuman.paths import resolve_paths


class TestResolvePaths:
    """Tests for resolve_paths."""

    def test_layout(self, tmp_path: Path) -> None:
        """Paths are joined under the project root."""
        paths = resolve_paths(tmp_path)
        assert paths.project_root == tmp_path
        assert paths.marker_dir == tmp_path / "nxHuman"
        assert paths.context_file == tmp_path / "nxHuman" / "project-context.json"
        assert paths.framework_file == tmp_path / "nxhuman.json"
        assert paths.rules_file == tmp_path / ".cursorrules"
        assert paths.legacy_context_file == tmp_path / "project-context.json"

    def test_deterministic(self, tmp_path: Path) -> None:
        """Identical input yields identical paths."""
        assert resolve_paths(tmp_path) == resolve_paths(tmp_path)

    def test_no_io(self, tmp_path: Path) -> None:
        """Resolving a nonexistent root creates nothing."""
        root = tmp_path / "does-not-exist"
        resolve_paths(root)
        assert not root.exists()

    def test_destination(self, tmp_path: Path) -> None:
        """Catalog-relative destinations join with POSIX separators."""
        paths = resolve_paths(tmp_path)
        assert paths.destination("nxHuman/WORKFLOW.md") == tmp_path / "nxHuman" / "WORKFLOW.md"

    @pytest.mark.parametrize("relative", ["../outside.md", "/etc/passwd", "nxHuman/../../x"])
    def test_destination_must_stay_inside(self, tmp_path: Path, relative: str) -> None:
        """Destinations cannot escape the project root."""
        with pytest.raises(ValueError, match="inside the project"):
            resolve_paths(tmp_path).destination(relative)
