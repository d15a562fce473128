"""Installation engine: gate, plan, migrate and write.

The planner is a state machine over explicit outcome values. Each step
returns either its product or an InstallerError; the planner inspects the
value and picks the next transition:

    INIT -> GATED -> (BLOCKED | PLANNING) -> WRITING -> (COMPLETED | FAILED)

with CANCELLED reachable from INIT and DRY_RUN as the terminal for previews.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable

from nxhuman.catalog import TemplateLibrary
from nxhuman.errors import ConfigurationError, InstallerError, WriteError
from nxhuman.filesystem import RealFileSystem
from nxhuman.merge import ContextMerger
from nxhuman.paths import InstallPaths, resolve_paths
from nxhuman.platforms import Platform, get_platform
from nxhuman.project_context import ProjectContext, render_context
from nxhuman.protocols import FileSystem, Writer
from nxhuman.scanner import ConflictScanner
from nxhuman.types import (
    FileSpec,
    InstallPlan,
    InstallRequest,
    RunResult,
    WriteOutcome,
    WriteStatus,
)
from nxhuman.writer import AtomicWriter

logger = logging.getLogger(__name__)


class PlannerState(str, Enum):
    """States of a single run."""

    INIT = "init"
    GATED = "gated"
    PLANNING = "planning"
    WRITING = "writing"


class InstallPlanner:
    """Orchestrates a single installer run.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        templates: TemplateLibrary,
        merger: ContextMerger,
        writer_factory: Callable[[bool], Writer],
    ) -> None:
        """Initialize planner with required dependencies.

        Args:
            filesystem: Filesystem abstraction, used for scanning.
            templates: Template library providing the catalog and sources.
            merger: Legacy context merger.
            writer_factory: Builds the per-file writer given the dry-run flag.
        """
        self.fs = filesystem
        self.templates = templates
        self.merger = merger
        self.writer_factory = writer_factory
        self.state = PlannerState.INIT

    @classmethod
    def create(
        cls,
        filesystem: FileSystem | None = None,
        templates_dir: Path | None = None,
    ) -> InstallPlanner:
        """Factory method for production instantiation.

        Args:
            filesystem: Optional filesystem abstraction (created if not provided).
            templates_dir: Optional templates directory (bundled templates if None).

        Returns:
            Configured InstallPlanner instance.
        """
        fs = filesystem or RealFileSystem()
        return cls(
            filesystem=fs,
            templates=TemplateLibrary(fs, templates_dir),
            merger=ContextMerger(fs),
            writer_factory=lambda dry_run: AtomicWriter(fs, dry_run=dry_run),
        )

    def run(
        self,
        request: InstallRequest,
        confirmed: bool = True,
        on_outcome: Callable[[WriteOutcome], None] | None = None,
    ) -> RunResult:
        """Execute one run against request.project_root.

        Args:
            request: Resolved request built at the process boundary.
            confirmed: False if the user declined the confirmation prompt.
            on_outcome: Optional callback receiving each per-file outcome.

        Returns:
            Exactly one RunResult variant.
        """
        self.state = PlannerState.INIT
        if not confirmed:
            logger.info("Installation cancelled before scanning")
            return RunResult.cancelled()

        platform = self._select_platform(request.platform)
        if isinstance(platform, InstallerError):
            return RunResult.failed(platform)

        paths = resolve_paths(request.project_root)

        self._transition(PlannerState.GATED)
        conflicts = self._scan(paths, platform)
        if isinstance(conflicts, InstallerError):
            return RunResult.failed(conflicts)
        if conflicts and not request.force_overwrite and not request.dry_run:
            logger.info("Blocked by %d existing files", len(conflicts))
            return RunResult.blocked(conflicts)

        self._transition(PlannerState.PLANNING)
        fresh = ProjectContext.for_project(paths.project_root.name, platform).to_dict()
        plan = self.templates.build_plan(paths, platform, render_context(fresh))
        if isinstance(plan, InstallerError):
            return RunResult.failed(plan)

        legacy_found = False
        if not request.dry_run:
            merged = self.merger.merge_legacy(paths.legacy_context_file, fresh)
            if isinstance(merged, InstallerError):
                return RunResult.failed(merged)
            context, legacy_found = merged
            if legacy_found:
                plan = self._with_context(plan, paths, render_context(context))

        self._transition(PlannerState.WRITING)
        return self._write_all(plan, request, paths, conflicts, legacy_found, on_outcome)

    def _transition(self, state: PlannerState) -> None:
        logger.debug("Planner %s -> %s", self.state.value, state.value)
        self.state = state

    def _select_platform(self, name: str | None) -> Platform | None | ConfigurationError:
        if name is None:
            return None
        try:
            return get_platform(name)
        except ConfigurationError as e:
            return e

    def _scan(self, paths: InstallPaths, platform: Platform | None) -> list[Path] | InstallerError:
        destinations = self.templates.destinations(paths, platform)
        if isinstance(destinations, InstallerError):
            return destinations
        scanner = ConflictScanner(self.fs, self.templates.legacy_paths(paths))
        return scanner.scan([paths.marker_dir, *destinations])

    @staticmethod
    def _with_context(plan: InstallPlan, paths: InstallPaths, content: bytes) -> InstallPlan:
        for spec in plan:
            if spec.destination == paths.context_file:
                return plan.replace(
                    FileSpec(spec.destination, content, required=spec.required, name=spec.name)
                )
        return plan

    def _write_all(
        self,
        plan: InstallPlan,
        request: InstallRequest,
        paths: InstallPaths,
        conflicts: list[Path],
        legacy_found: bool,
        on_outcome: Callable[[WriteOutcome], None] | None,
    ) -> RunResult:
        writer = self.writer_factory(request.dry_run)
        outcomes: list[WriteOutcome] = []
        written: list[Path] = []

        for spec in plan:
            outcome = writer.write(spec.destination, spec.content, request.force_overwrite)
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

            if not outcome.ok:
                error = outcome.error or WriteError(spec.destination, "unknown failure")
                logger.error("Stopping after failed write of %s", spec.destination)
                return RunResult.failed(error.with_written(written), written, outcomes)

            if outcome.status is WriteStatus.WRITTEN:
                written.append(spec.destination)
                if legacy_found and spec.destination == paths.context_file:
                    try:
                        self.merger.retire(paths.legacy_context_file)
                    except OSError as e:
                        error = WriteError(paths.legacy_context_file, e, written)
                        return RunResult.failed(error, written, outcomes)

        if request.dry_run:
            legacy = paths.legacy_context_file
            pending = legacy if self.fs.exists(legacy) else None
            return RunResult.dry_run(plan.destinations, conflicts, outcomes, migrated=pending)
        logger.info("Installed %d files into %s", len(written), paths.project_root)
        migrated = paths.legacy_context_file if legacy_found else None
        return RunResult.completed(written, outcomes, migrated=migrated)
