"""
Feed routing.

Decides whether the filter runs for a page URL, based on which feed
contexts are switched on in the runOn configuration.
"""

import logging
import re
from typing import Dict, Mapping, Optional, Pattern

from activityfilter.core.config.models import RunOnConfig

logger = logging.getLogger(__name__)

DEFAULT_URL_PATTERNS = {
    "home": "https://anilist.co/home",
    "social": "https://anilist.co/*/social",
    "profile": "https://anilist.co/user/*/",
}


def compile_url_pattern(pattern: str) -> Pattern:
    """Compile a URL pattern where '*' matches any run of characters."""
    parts = [re.escape(part) for part in pattern.split('*')]
    return re.compile('.*'.join(parts))


class FeedRouter:
    """
    Map page URLs to feed contexts.

    A URL is allowed when it starts with the pattern of a context enabled in
    runOn. Contexts without a known URL pattern are ignored.
    """

    def __init__(self, run_on: RunOnConfig, url_patterns: Optional[Mapping[str, str]] = None):
        self.run_on = run_on
        self.url_patterns: Dict[str, str] = dict(url_patterns or DEFAULT_URL_PATTERNS)
        self._compiled = {
            context: compile_url_pattern(pattern)
            for context, pattern in self.url_patterns.items()
        }

    def enabled_contexts(self):
        """Contexts that are switched on and have a URL pattern."""
        return [context for context in self.run_on.enabled_contexts() if context in self._compiled]

    def context_for(self, url: str) -> Optional[str]:
        """
        Find the enabled feed context a URL belongs to.

        Args:
            url: Page URL

        Returns:
            Context name, or None if the filter should not run on this URL
        """
        for context in self.enabled_contexts():
            if self._compiled[context].match(url):
                return context
        return None

    def is_allowed_url(self, url: str) -> bool:
        """Whether the filter runs on this URL."""
        allowed = self.context_for(url) is not None
        if not allowed:
            logger.debug(f"URL not covered by enabled feeds: {url}")
        return allowed
