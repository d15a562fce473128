"""Safe project-scaffolding installer for the nxHuman framework."""

__version__ = "0.1.0"

# Export protocol interfaces and result types for callers embedding the engine
from nxhuman.protocols import FileSystem, Installer, Writer
from nxhuman.types import (
    FileSpec,
    InstallPlan,
    InstallRequest,
    RunResult,
    RunStatus,
    WriteOutcome,
    WriteStatus,
)

__all__ = [
    "__version__",
    "FileSpec",
    "FileSystem",
    "InstallPlan",
    "InstallRequest",
    "Installer",
    "RunResult",
    "RunStatus",
    "WriteOutcome",
    "WriteStatus",
    "Writer",
]
