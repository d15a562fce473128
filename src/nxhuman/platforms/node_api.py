"""Node.js API platform implementation."""

from __future__ import annotations

from typing import Any

from nxhuman.platforms.base import BasePlatform


class NodeApiPlatform(BasePlatform):
    """Backend-only Node.js service."""

    name = "node-api"
    display_name = "Node.js API"

    def get_tech_stack(self) -> dict[str, Any]:
        return {"backend": {"runtime": "Node.js", "language": "TypeScript", "database": "UNKNOWN"}}

    # get_unknowns inherited from BasePlatform
