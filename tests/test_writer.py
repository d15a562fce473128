"""Tests for atomic file writes."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nxhuman.filesystem import RealFileSystem
from nxhuman.types import WriteStatus
from nxhuman.writer import AtomicWriter, temp_path_for


def _siblings(path: Path) -> list[str]:
    return sorted(p.name for p in path.parent.iterdir())


class TestTempPath:
    """Tests for temp_path_for."""

    def test_same_directory(self, tmp_path: Path) -> None:
        """Temp files live next to their destination."""
        dest = tmp_path / "nxHuman" / "project-context.json"
        temp = temp_path_for(dest)
        assert temp.parent == dest.parent
        assert temp.name.startswith("project-context.json.tmp-")

    def test_unique(self, tmp_path: Path) -> None:
        """Two temp paths for the same destination never collide."""
        dest = tmp_path / "a.md"
        assert temp_path_for(dest) != temp_path_for(dest)


class TestAtomicWriter:
    """Tests for AtomicWriter.write."""

    def test_writes_exact_bytes(self, tmp_path: Path) -> None:
        """Destination holds exactly the given content."""
        writer = AtomicWriter(RealFileSystem())
        dest = tmp_path / "out.json"
        content = b'{"k": "\xc3\xa9"}\r\n'

        outcome = writer.write(dest, content)

        assert outcome.status is WriteStatus.WRITTEN
        assert outcome.path == dest
        assert dest.read_bytes() == content
        assert _siblings(dest) == ["out.json"]

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Missing ancestors are created."""
        writer = AtomicWriter(RealFileSystem())
        dest = tmp_path / "a" / "b" / "c.md"

        outcome = writer.write(dest, b"x")

        assert outcome.ok
        assert dest.read_bytes() == b"x"

    def test_existing_file_without_force(self, tmp_path: Path) -> None:
        """An existing destination fails with a conflict naming the path."""
        writer = AtomicWriter(RealFileSystem())
        dest = tmp_path / ".cursorrules"
        dest.write_text("mine")

        outcome = writer.write(dest, b"theirs", force_allowed=False)

        assert outcome.status is WriteStatus.FAILED
        assert outcome.error is not None
        assert str(dest) in outcome.error.message
        assert "--force" in outcome.error.message
        assert dest.read_text() == "mine"

    def test_existing_file_with_force(self, tmp_path: Path) -> None:
        """With force the destination is replaced."""
        writer = AtomicWriter(RealFileSystem())
        dest = tmp_path / ".cursorrules"
        dest.write_text("mine")

        outcome = writer.write(dest, b"theirs", force_allowed=True)

        assert outcome.status is WriteStatus.WRITTEN
        assert dest.read_bytes() == b"theirs"

    def test_dry_run_touches_nothing(self, tmp_path: Path) -> None:
        """Dry-run reports SKIPPED without creating directories or files."""
        writer = AtomicWriter(RealFileSystem(), dry_run=True)
        dest = tmp_path / "missing" / "dir" / "file.md"

        outcome = writer.write(dest, b"x")

        assert outcome.status is WriteStatus.SKIPPED
        assert not (tmp_path / "missing").exists()

    def test_dry_run_makes_no_filesystem_calls(self, mock_filesystem: MagicMock) -> None:
        """Dry-run never calls into the filesystem at all."""
        writer = AtomicWriter(mock_filesystem, dry_run=True)

        writer.write(Path("/project/a.md"), b"x")

        assert mock_filesystem.method_calls == []


class TestAtomicity:
    """Interrupted writes leave the destination whole and no temp behind."""

    def test_rename_failure_keeps_absent_destination_absent(
        self, flaky_fs, tmp_path: Path
    ) -> None:
        """A failed rename leaves no destination and no temp file."""
        writer = AtomicWriter(flaky_fs)
        dest = tmp_path / "nxhuman.json"
        flaky_fs.fail_replace_for = {"nxhuman.json"}

        outcome = writer.write(dest, b"new content")

        assert outcome.status is WriteStatus.FAILED
        assert isinstance(outcome.error.cause, PermissionError)
        assert not dest.exists()
        assert _siblings(dest) == []

    def test_rename_failure_keeps_existing_destination_intact(
        self, flaky_fs, tmp_path: Path
    ) -> None:
        """With force, a failed rename leaves the old content fully intact."""
        writer = AtomicWriter(flaky_fs)
        dest = tmp_path / "nxhuman.json"
        dest.write_bytes(b"old content")
        flaky_fs.fail_replace_for = {"nxhuman.json"}

        outcome = writer.write(dest, b"new content", force_allowed=True)

        assert outcome.status is WriteStatus.FAILED
        assert dest.read_bytes() == b"old content"
        assert _siblings(dest) == ["nxhuman.json"]

    def test_partial_temp_write_is_cleaned_up(self, flaky_fs, tmp_path: Path) -> None:
        """A temp file half-written before an error is removed."""
        writer = AtomicWriter(flaky_fs)
        dest = tmp_path / "doc.md"
        flaky_fs.fail_write_for = {"doc.md"}

        outcome = writer.write(dest, b"0123456789")

        assert outcome.status is WriteStatus.FAILED
        assert "No space left" in outcome.error.message
        assert _siblings(dest) == []

    def test_cleanup_failure_still_reports_original_error(
        self, mock_filesystem: MagicMock
    ) -> None:
        """If the temp file cannot be removed, the write error is still returned."""
        mock_filesystem.exists.side_effect = lambda p: p.name.startswith("a.md.tmp-")
        mock_filesystem.replace.side_effect = OSError("rename failed")
        mock_filesystem.unlink.side_effect = OSError("unlink failed")
        writer = AtomicWriter(mock_filesystem)

        outcome = writer.write(Path("/project/a.md"), b"x")

        assert outcome.status is WriteStatus.FAILED
        assert "rename failed" in outcome.error.message

    def test_mkdir_failure(self, mock_filesystem: MagicMock) -> None:
        """A parent directory that cannot be created fails the write."""
        mock_filesystem.mkdir.side_effect = PermissionError("denied")
        writer = AtomicWriter(mock_filesystem)

        outcome = writer.write(Path("/project/nxHuman/a.md"), b"x")

        assert outcome.status is WriteStatus.FAILED
        mock_filesystem.write_bytes.assert_not_called()

    @pytest.mark.parametrize("force", [True, False])
    def test_temp_written_then_renamed(self, mock_filesystem: MagicMock, force: bool) -> None:
        """Content goes to the temp path and is renamed onto the destination."""
        writer = AtomicWriter(mock_filesystem)
        dest = Path("/project/a.md")

        writer.write(dest, b"x", force_allowed=force)

        temp, content = mock_filesystem.write_bytes.call_args.args
        assert temp.parent == dest.parent
        assert temp != dest
        assert content == b"x"
        mock_filesystem.replace.assert_called_once_with(temp, dest)
