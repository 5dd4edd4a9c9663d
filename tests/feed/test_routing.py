"""
Tests for FeedRouter URL gating.
"""

import pytest

from activityfilter.core.config.models import RunOnConfig
from activityfilter.feed.routing import DEFAULT_URL_PATTERNS, FeedRouter, compile_url_pattern


class TestCompileUrlPattern:
    """Test wildcard URL patterns."""

    def test_wildcard_matches_any_run(self):
        """Test '*' matches any run of characters."""
        pattern = compile_url_pattern("https://anilist.co/*/social")
        assert pattern.match("https://anilist.co/anime/1/social")
        assert pattern.match("https://anilist.co/manga/30013/One-Piece/social")
        assert not pattern.match("https://anilist.co/home")

    def test_special_characters_escaped(self):
        """Test dots in patterns match literally."""
        pattern = compile_url_pattern("https://anilist.co/home")
        assert not pattern.match("https://anilistXco/home")

    def test_prefix_match(self):
        """Test patterns are anchored at the start of the URL."""
        pattern = compile_url_pattern("https://anilist.co/home")
        assert pattern.match("https://anilist.co/home?page=2")
        assert not pattern.match("http://example.com/https://anilist.co/home")


class TestFeedRouter:
    """Test FeedRouter context resolution."""

    @pytest.fixture
    def router(self):
        return FeedRouter(RunOnConfig())

    def test_default_contexts(self, router):
        """Test home and social are enabled by default."""
        assert router.enabled_contexts() == ["home", "social"]

    def test_home_and_social_allowed_by_default(self, router):
        """Test default feed URLs resolve to their context."""
        assert router.context_for("https://anilist.co/home") == "home"
        assert router.context_for("https://anilist.co/anime/1/Cowboy-Bebop/social") == "social"
        assert router.is_allowed_url("https://anilist.co/home") is True

    def test_profile_disabled_by_default(self, router):
        """Test profile feeds are skipped unless enabled."""
        assert router.context_for("https://anilist.co/user/someone/") is None
        assert router.is_allowed_url("https://anilist.co/user/someone/") is False

    def test_profile_enabled(self):
        """Test toggling contexts changes which URLs are allowed."""
        router = FeedRouter(RunOnConfig(profile=True, home=False))
        assert router.is_allowed_url("https://anilist.co/user/someone/") is True
        assert router.is_allowed_url("https://anilist.co/home") is False

    def test_unrelated_url(self, router):
        """Test URLs outside every pattern are not allowed."""
        assert router.is_allowed_url("https://example.com/") is False

    def test_custom_patterns(self):
        """Test extra contexts work once a pattern is supplied."""
        run_on = RunOnConfig.model_validate({"home": False, "social": False, "forum": True})
        router = FeedRouter(run_on, {**DEFAULT_URL_PATTERNS, "forum": "https://anilist.co/forum/*"})

        assert router.enabled_contexts() == ["forum"]
        assert router.context_for("https://anilist.co/forum/recent") == "forum"

    def test_context_without_pattern_ignored(self):
        """Test an extra context without a pattern is ignored."""
        run_on = RunOnConfig.model_validate({"home": False, "social": False, "forum": True})
        router = FeedRouter(run_on)

        assert router.enabled_contexts() == []
        assert router.is_allowed_url("https://anilist.co/forum/recent") is False
