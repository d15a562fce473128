"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Dependencies are typed using Protocols rather than concrete implementations,
so test doubles can be injected without inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from nxhuman.protocols import Installer


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for the services used by CLI commands.
    """

    installer: Installer


def create_context(templates_dir: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        templates_dir: Override the bundled templates directory.

    Returns:
        Configured AppContext with all dependencies.
    """
    from nxhuman.filesystem import RealFileSystem
    from nxhuman.planner import InstallPlanner

    installer = InstallPlanner.create(filesystem=RealFileSystem(), templates_dir=templates_dir)

    return AppContext(installer=installer)
