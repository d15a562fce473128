"""Template catalog: which files an install writes and where their content comes from.

The catalog lives in ``templates/catalog.yaml`` next to the template sources.
Entries are listed in plan order.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from nxhuman.errors import SourceUnavailableError
from nxhuman.paths import InstallPaths
from nxhuman.platforms import Platform
from nxhuman.protocols import FileSystem
from nxhuman.types import FileSpec, InstallPlan

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
CATALOG_FILE = "catalog.yaml"


def _check_relative(value: str) -> str:
    pure = PurePosixPath(value)
    if not value or pure.is_absolute() or ".." in pure.parts:
        raise ValueError(f"Path must be relative to the project root: {value!r}")
    return value


class TemplateEntry(BaseModel):
    """One file written by an install.

    Generated entries have no source; the context entry is always written to
    the layout's context file.
    """

    name: str
    destination: str | None = None
    source: str | None = None
    generated: Literal["context"] | None = None
    required: bool = True

    @model_validator(mode="after")
    def _check_origin(self) -> TemplateEntry:
        if (self.source is None) == (self.generated is None):
            raise ValueError(f"Entry '{self.name}' needs exactly one of 'source' or 'generated'")
        if self.source is not None and not self.destination:
            raise ValueError(f"Entry '{self.name}' needs a destination")
        if self.destination is not None:
            _check_relative(self.destination)
        return self

    def resolve_destination(self, paths: InstallPaths) -> Path:
        if self.generated == "context":
            return paths.context_file
        return paths.destination(self.destination or "")


class PlatformGuide(BaseModel):
    """Where the selected platform's guide is installed."""

    destination: str = "nxHuman/PLATFORM.md"
    required: bool = False

    @field_validator("destination")
    @classmethod
    def _check_destination(cls, value: str) -> str:
        return _check_relative(value)


class TemplateCatalog(BaseModel):
    """Parsed catalog.yaml."""

    version: int = 1
    files: list[TemplateEntry] = Field(default_factory=list)
    platform_guide: PlatformGuide = Field(default_factory=PlatformGuide)
    legacy: list[str] = Field(default_factory=list)

    @field_validator("legacy")
    @classmethod
    def _check_legacy(cls, value: list[str]) -> list[str]:
        return [_check_relative(v) for v in value]

    def entries_for(self, platform: Platform | None) -> list[TemplateEntry]:
        """Catalog entries in plan order, including the platform guide if any."""
        entries = list(self.files)
        if platform is not None:
            entries.append(
                TemplateEntry(
                    name=f"{platform.name}-guide",
                    source=platform.guide_template,
                    destination=self.platform_guide.destination,
                    required=self.platform_guide.required,
                )
            )
        return entries


class TemplateLibrary:
    """Loads the catalog and template sources from a templates directory.

    Failures are returned as SourceUnavailableError values, never raised.
    """

    def __init__(self, filesystem: FileSystem, templates_dir: Path | None = None) -> None:
        """Initialize template library.

        Args:
            filesystem: Filesystem abstraction.
            templates_dir: Directory holding catalog.yaml. Defaults to the
                templates bundled with the package.
        """
        self.fs = filesystem
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self._catalog: TemplateCatalog | None = None

    def load_catalog(self) -> TemplateCatalog | SourceUnavailableError:
        """Parse and validate catalog.yaml (cached after the first success)."""
        if self._catalog is not None:
            return self._catalog

        catalog_path = self.templates_dir / CATALOG_FILE
        try:
            data = yaml.safe_load(self.fs.read_text(catalog_path)) or {}
            self._catalog = TemplateCatalog.model_validate(data)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
            return SourceUnavailableError(str(catalog_path), e)
        return self._catalog

    def read(self, source: str) -> bytes | SourceUnavailableError:
        """Read one template source.

        Args:
            source: Path relative to the templates directory.
        """
        path = self.templates_dir / source
        try:
            return self.fs.read_bytes(path)
        except OSError as e:
            return SourceUnavailableError(str(path), e)

    def destinations(
        self, paths: InstallPaths, platform: Platform | None
    ) -> list[Path] | SourceUnavailableError:
        """Absolute destination paths of every catalog entry."""
        catalog = self.load_catalog()
        if isinstance(catalog, SourceUnavailableError):
            return catalog
        return [e.resolve_destination(paths) for e in catalog.entries_for(platform)]

    def legacy_paths(self, paths: InstallPaths) -> list[Path]:
        """Historical install artifacts listed in the catalog."""
        catalog = self.load_catalog()
        if isinstance(catalog, SourceUnavailableError):
            return []
        return [paths.destination(p) for p in catalog.legacy]

    def build_plan(
        self,
        paths: InstallPaths,
        platform: Platform | None,
        context_content: bytes,
    ) -> InstallPlan | SourceUnavailableError:
        """Resolve every entry's content eagerly.

        A required source that cannot be read fails the whole plan. An
        optional one is dropped from the plan.

        Args:
            paths: Install layout for the project.
            platform: Selected platform, or None.
            context_content: Serialized project context for generated entries.

        Returns:
            The InstallPlan, or the first SourceUnavailableError.
        """
        catalog = self.load_catalog()
        if isinstance(catalog, SourceUnavailableError):
            return catalog

        specs: list[FileSpec] = []
        for entry in catalog.entries_for(platform):
            if entry.generated == "context":
                content: bytes | SourceUnavailableError = context_content
            else:
                content = self.read(entry.source or "")
            if isinstance(content, SourceUnavailableError):
                if entry.required:
                    return content
                logger.warning("Skipping optional template %s: %s", entry.name, content.message)
                continue
            specs.append(
                FileSpec(
                    destination=entry.resolve_destination(paths),
                    content=content,
                    required=entry.required,
                    name=entry.name,
                )
            )
        try:
            return InstallPlan.of(specs)
        except ValueError as e:
            return SourceUnavailableError(str(self.templates_dir / CATALOG_FILE), e)
