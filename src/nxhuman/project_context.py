"""Schema of the project context/state file."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nxhuman.platforms import Platform
from nxhuman.platforms.base import DEFAULT_UNKNOWNS

MINIMAL_TECH_STACK: dict[str, Any] = {
    "frontend": {"language": "TypeScript"},
    "backend": {"database": "UNKNOWN"},
}


class ProjectContext(BaseModel):
    """Project metadata, decisions and open questions.

    Unknown keys are kept so that data carried over from a legacy file
    survives a round trip.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    project_name: str = Field(alias="projectName")
    platform: str | None = None
    tech_stack: dict[str, Any] = Field(
        default_factory=lambda: json.loads(json.dumps(MINIMAL_TECH_STACK)),
        alias="techStack",
    )
    decision_log: list[Any] = Field(default_factory=list, alias="decisionLog")
    unknowns: list[str] = Field(default_factory=lambda: list(DEFAULT_UNKNOWNS))

    @classmethod
    def for_project(cls, project_name: str, platform: Platform | None = None) -> ProjectContext:
        """Build the fresh context for a new install.

        Args:
            project_name: Usually the project directory name.
            platform: Selected platform, or None for the minimal variant.
        """
        if platform is None:
            return cls(projectName=project_name)
        return cls.model_validate({"projectName": project_name, **platform.context_fragment()})

    def to_dict(self) -> dict[str, Any]:
        """Dump with on-disk keys.

        A missing platform is written as null so it replaces any platform
        carried over from a legacy file.
        """
        return self.model_dump(by_alias=True)


def render_context(data: dict[str, Any]) -> bytes:
    """Serialize a context object as the bytes written to disk."""
    return (json.dumps(data, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
