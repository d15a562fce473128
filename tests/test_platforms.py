"""Tests for platform modules."""

from __future__ import annotations

import pytest

from nxhuman.errors import ConfigurationError
from nxhuman.platforms import (
    BasePlatform,
    NextJsPlatform,
    NodeApiPlatform,
    Platform,
    ReactNativePlatform,
    get_platform,
    get_platform_choices,
)
from nxhuman.platforms.base import DEFAULT_UNKNOWNS


class TestGetPlatform:
    """Tests for get_platform factory function."""

    def test_get_nextjs_platform(self) -> None:
        """Test getting the Next.js platform."""
        assert isinstance(get_platform("nextjs"), NextJsPlatform)

    def test_get_react_native_platform(self) -> None:
        """Test getting the React Native platform."""
        assert isinstance(get_platform("react-native"), ReactNativePlatform)

    def test_get_node_api_platform(self) -> None:
        """Test getting the Node.js API platform."""
        assert isinstance(get_platform("node-api"), NodeApiPlatform)

    def test_case_insensitive(self) -> None:
        """Platform ids are matched case-insensitively."""
        assert isinstance(get_platform(" NextJS "), NextJsPlatform)

    def test_get_unknown_platform(self) -> None:
        """Unknown platforms raise ConfigurationError listing every choice."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_platform("unknown")
        assert exc_info.value.choices == get_platform_choices()
        for choice in get_platform_choices():
            assert choice in exc_info.value.message

    def test_choices_order(self) -> None:
        """Choices are listed in registration order."""
        assert get_platform_choices() == ["nextjs", "react-native", "node-api"]


class TestPlatforms:
    """Tests shared by every platform implementation."""

    @pytest.fixture(params=["nextjs", "react-native", "node-api"])
    def platform(self, request: pytest.FixtureRequest) -> Platform:
        return get_platform(request.param)

    def test_satisfies_protocol(self, platform: Platform) -> None:
        """Every platform satisfies the Platform protocol."""
        assert isinstance(platform, Platform)
        assert isinstance(platform, BasePlatform)

    def test_context_fragment(self, platform: Platform) -> None:
        """The fragment carries id, tech stack and unknowns."""
        fragment = platform.context_fragment()
        assert fragment["platform"] == platform.name
        assert fragment["techStack"] == platform.get_tech_stack()
        assert set(DEFAULT_UNKNOWNS) <= set(fragment["unknowns"])

    def test_guide_template(self, platform: Platform) -> None:
        """Guides are looked up by platform id."""
        assert platform.guide_template == f"platforms/{platform.name}.md"

    def test_fragment_is_fresh(self, platform: Platform) -> None:
        """Mutating a fragment does not leak into the next one."""
        platform.context_fragment()["unknowns"].append("leak")
        assert "leak" not in platform.context_fragment()["unknowns"]


class TestNextJsPlatform:
    """Tests for NextJsPlatform."""

    def test_display_name(self) -> None:
        """Test the human-readable name."""
        assert NextJsPlatform().display_name == "Next.js 15 (PWA)"

    def test_pwa_stack(self) -> None:
        """Test the tech stack records a PWA."""
        assert NextJsPlatform().get_tech_stack()["frontend"]["pwa"] is True


class TestNodeApiPlatform:
    """Tests for NodeApiPlatform."""

    def test_default_unknowns(self) -> None:
        """Test the inherited unknowns are the defaults."""
        assert NodeApiPlatform().get_unknowns() == DEFAULT_UNKNOWNS
