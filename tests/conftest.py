"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest
import yaml

from nxhuman.filesystem import RealFileSystem
from nxhuman.planner import InstallPlanner
from nxhuman.types import InstallRequest


class FlakyFileSystem(RealFileSystem):
    """Real filesystem that fails chosen operations for chosen destinations."""

    def __init__(self) -> None:
        self.fail_replace_for: set[str] = set()
        self.fail_write_for: set[str] = set()
        self.replace_calls: list[tuple[Path, Path]] = []

    def write_bytes(self, path: Path, content: bytes) -> None:
        if any(path.name.startswith(f"{name}.tmp-") for name in self.fail_write_for):
            # Leave a partial temp file behind, like a full disk would
            path.write_bytes(content[: len(content) // 2])
            raise OSError(28, "No space left on device")
        super().write_bytes(path, content)

    def replace(self, src: Path, dst: Path) -> None:
        self.replace_calls.append((src, dst))
        if dst.name in self.fail_replace_for:
            raise PermissionError(13, "Permission denied", str(dst))
        super().replace(src, dst)


def _snapshot(root: Path) -> dict[str, bytes | None]:
    tree: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        tree[rel] = None if path.is_dir() else path.read_bytes()
    return tree


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    """Map every entry under a directory to its bytes (None for directories)."""
    return _snapshot


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty target project directory."""
    root = tmp_path / "my-app"
    root.mkdir()
    return root


@pytest.fixture
def flaky_fs() -> FlakyFileSystem:
    """Filesystem with injectable failures."""
    return FlakyFileSystem()


@pytest.fixture
def make_request(project_root: Path) -> Callable[..., InstallRequest]:
    """Build requests against the project_root fixture."""

    def _make(**kwargs) -> InstallRequest:
        kwargs.setdefault("non_interactive", True)
        return InstallRequest(project_root=project_root, **kwargs)

    return _make


@pytest.fixture
def planner() -> InstallPlanner:
    """Planner over the real filesystem and bundled templates."""
    return InstallPlanner.create()


@pytest.fixture
def make_templates(tmp_path: Path) -> Callable[..., Path]:
    """Write a small templates directory with a catalog of plain sources.

    Each name becomes source ``<name>.md`` installed at ``nxHuman/<name>.md``.
    The generated context entry is always first.
    """

    def _make(names: list[str], missing: tuple[str, ...] = (), optional: tuple[str, ...] = ()) -> Path:
        templates = tmp_path / "templates"
        templates.mkdir(exist_ok=True)
        files: list[dict] = [{"name": "context", "generated": "context"}]
        for name in names:
            files.append(
                {
                    "name": name,
                    "source": f"{name}.md",
                    "destination": f"nxHuman/{name}.md",
                    "required": name not in optional,
                }
            )
            if name not in missing:
                (templates / f"{name}.md").write_text(f"# {name}\n")
        (templates / "catalog.yaml").write_text(yaml.safe_dump({"version": 1, "files": files}))
        return templates

    return _make


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.read_text.return_value = ""
    fs.read_bytes.return_value = b""
    return fs
