"""Request resolution at the process boundary.

Environment variables and terminal detection are read here, once, and
folded into an immutable InstallRequest. Nothing below this module looks
at ambient process state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from nxhuman.platforms import get_platform
from nxhuman.types import InstallRequest

# Values of --platform meaning "minimal variant"
MINIMAL_PLATFORM_ALIASES = frozenset({"none", "minimal"})


def ci_enabled(environ: Mapping[str, str]) -> bool:
    """True when the CI variable is set to anything but an empty string or "false"."""
    value = environ.get("CI", "")
    return bool(value) and value.strip().lower() != "false"


def is_non_interactive(yes: bool, environ: Mapping[str, str], stdout_is_tty: bool) -> bool:
    """Decide whether prompts may be shown.

    Args:
        yes: The explicit --yes flag.
        environ: Process environment.
        stdout_is_tty: Whether standard output is an interactive terminal.

    Returns:
        True if any of the three signals asks for non-interactive mode.
    """
    return yes or ci_enabled(environ) or not stdout_is_tty


def normalize_platform(value: str | None) -> str | None:
    """Validate a platform selection.

    Returns:
        The canonical platform id, or None for the minimal variant.

    Raises:
        ConfigurationError: If the value is not a known platform.
    """
    if value is None or value.strip().lower() in MINIMAL_PLATFORM_ALIASES:
        return None
    return get_platform(value).name


def build_request(
    target: Path,
    *,
    yes: bool = False,
    force: bool = False,
    dry_run: bool = False,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    stdout_is_tty: bool = True,
) -> InstallRequest:
    """Build the immutable request for a run.

    Args:
        target: Project directory (relative paths are resolved).
        yes: Explicit non-interactive flag.
        force: Overwrite existing files.
        dry_run: Preview without writing.
        platform: Platform id, "none", or None.
        environ: Process environment (empty if None).
        stdout_is_tty: Whether stdout is a terminal.

    Returns:
        InstallRequest for the engine.

    Raises:
        ConfigurationError: If platform is not a known platform.
    """
    return InstallRequest(
        project_root=target.expanduser().resolve(),
        non_interactive=is_non_interactive(yes, environ or {}, stdout_is_tty),
        dry_run=dry_run,
        force_overwrite=force,
        platform=normalize_platform(platform),
    )
