"""Next.js platform implementation."""

from __future__ import annotations

from typing import Any

from nxhuman.platforms.base import DEFAULT_UNKNOWNS, BasePlatform


class NextJsPlatform(BasePlatform):
    """Next.js 15 progressive web app."""

    name = "nextjs"
    display_name = "Next.js 15 (PWA)"

    def get_tech_stack(self) -> dict[str, Any]:
        return {
            "frontend": {
                "framework": "Next.js 15",
                "language": "TypeScript",
                "router": "App Router",
                "pwa": True,
            },
            "backend": {"runtime": "Next.js route handlers", "database": "UNKNOWN"},
        }

    def get_unknowns(self) -> list[str]:
        return [*DEFAULT_UNKNOWNS, "Decide offline caching strategy"]
