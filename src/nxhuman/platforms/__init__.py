"""Platform-specific implementations."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from nxhuman.errors import ConfigurationError

from .base import BasePlatform
from .nextjs import NextJsPlatform
from .node_api import NodeApiPlatform
from .react_native import ReactNativePlatform


@runtime_checkable
class Platform(Protocol):
    """Protocol defining the interface for platform implementations.

    New platforms can be added by registering a class in PLATFORMS without
    modifying the installer.
    """

    name: str
    display_name: str

    @property
    def guide_template(self) -> str:
        """Template path of the platform guide."""
        raise NotImplementedError

    def get_tech_stack(self) -> dict[str, Any]:
        """Get the tech stack recorded in the project context."""
        raise NotImplementedError

    def get_unknowns(self) -> list[str]:
        """Get the open questions seeded into a new project context."""
        raise NotImplementedError

    def context_fragment(self) -> dict[str, Any]:
        """Build the platform-specific part of the project context."""
        raise NotImplementedError


__all__ = [
    "BasePlatform",
    "Platform",
    "NextJsPlatform",
    "NodeApiPlatform",
    "ReactNativePlatform",
    "PLATFORMS",
    "get_platform",
    "get_platform_choices",
]


PLATFORMS: dict[str, type[BasePlatform]] = {
    "nextjs": NextJsPlatform,
    "react-native": ReactNativePlatform,
    "node-api": NodeApiPlatform,
}


def get_platform_choices() -> list[str]:
    """Get all valid platform identifiers, in display order."""
    return list(PLATFORMS.keys())


def get_platform(name: str) -> Platform:
    """Get a platform instance by name.

    Args:
        name: Platform identifier (nextjs, react-native, node-api).

    Returns:
        Platform instance.

    Raises:
        ConfigurationError: If the platform is not supported.
    """
    key = name.strip().lower()
    if key not in PLATFORMS:
        raise ConfigurationError(name, get_platform_choices())
    return PLATFORMS[key]()
