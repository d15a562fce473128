"""React Native (Expo) platform implementation."""

from __future__ import annotations

from typing import Any

from nxhuman.platforms.base import DEFAULT_UNKNOWNS, BasePlatform


class ReactNativePlatform(BasePlatform):
    """React Native mobile app built with Expo."""

    name = "react-native"
    display_name = "React Native (Expo)"

    def get_tech_stack(self) -> dict[str, Any]:
        return {
            "frontend": {"framework": "React Native", "language": "TypeScript", "tooling": "Expo"},
            "backend": {"database": "UNKNOWN"},
        }

    def get_unknowns(self) -> list[str]:
        return [*DEFAULT_UNKNOWNS, "Choose target app stores"]
