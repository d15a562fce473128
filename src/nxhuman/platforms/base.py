"""Base platform implementation with shared behavior.

All platforms contribute the same pieces to an install: a tech stack for
the project context, a list of open questions, and a platform guide. They
vary only in the values.

Pattern: Template Method - base class assembles the context fragment,
subclasses provide specific steps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

DEFAULT_UNKNOWNS = [
    "Define core features",
    "Specify API contracts",
    "Choose components",
]


class BasePlatform(ABC):
    """Base class for platform implementations.

    Subclasses set `name` and `display_name` and override `get_tech_stack()`.
    """

    name: str
    display_name: str

    @abstractmethod
    def get_tech_stack(self) -> dict[str, Any]:
        """Get the tech stack recorded in the project context."""
        ...

    def get_unknowns(self) -> list[str]:
        """Get the open questions seeded into a new project context.

        Override in subclasses to add platform-specific questions.
        """
        return list(DEFAULT_UNKNOWNS)

    @property
    def guide_template(self) -> str:
        """Template path of this platform's guide, relative to the templates dir."""
        return f"platforms/{self.name}.md"

    def context_fragment(self) -> dict[str, Any]:
        """Build the platform-specific part of the project context.

        Template Method: combines the identifier with the overridable
        tech stack and unknowns.

        Returns:
            Dict with platform, techStack and unknowns keys.
        """
        return {
            "platform": self.name,
            "techStack": self.get_tech_stack(),
            "unknowns": self.get_unknowns(),
        }
