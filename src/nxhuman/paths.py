"""Destination layout for an nxHuman install."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

MARKER_DIR = "nxHuman"
CONTEXT_FILE = "project-context.json"
FRAMEWORK_FILE = "nxhuman.json"
RULES_FILE = ".cursorrules"
LEGACY_CONTEXT_FILE = "project-context.json"


@dataclass(frozen=True)
class InstallPaths:
    """Absolute paths derived from a project root.

    Attributes:
        project_root: Root of the target project.
        marker_dir: Directory holding all installed state.
        context_file: Context/state JSON inside the marker directory.
        framework_file: Framework directives at the project root.
        rules_file: Editor rule file at the project root.
        legacy_context_file: Context file written by older installers.
    """

    project_root: Path
    marker_dir: Path
    context_file: Path
    framework_file: Path
    rules_file: Path
    legacy_context_file: Path

    def destination(self, relative: str) -> Path:
        """Join a catalog-relative destination (POSIX separators) onto the root.

        Args:
            relative: Relative path such as "nxHuman/WORKFLOW.md".

        Returns:
            Absolute destination path.

        Raises:
            ValueError: If the path is absolute or escapes the project root.
        """
        pure = PurePosixPath(relative)
        if pure.is_absolute() or ".." in pure.parts:
            raise ValueError(f"Destination must stay inside the project: {relative}")
        return self.project_root.joinpath(*pure.parts)


def resolve_paths(project_root: Path) -> InstallPaths:
    """Compute the install layout for a project root.

    Pure function: no filesystem access, identical input gives identical output.
    """
    marker_dir = project_root / MARKER_DIR
    return InstallPaths(
        project_root=project_root,
        marker_dir=marker_dir,
        context_file=marker_dir / CONTEXT_FILE,
        framework_file=project_root / FRAMEWORK_FILE,
        rules_file=project_root / RULES_FILE,
        legacy_context_file=project_root / LEGACY_CONTEXT_FILE,
    )
