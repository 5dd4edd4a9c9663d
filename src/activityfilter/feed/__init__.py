"""
Feed integration: routing, load-more pagination and the session that feeds
entries to the condition evaluator.
"""

from .routing import FeedRouter, DEFAULT_URL_PATTERNS
from .pagination import LoadMoreController
from .session import FeedSession, BatchResult

__all__ = [
    "FeedRouter",
    "DEFAULT_URL_PATTERNS",
    "LoadMoreController",
    "FeedSession",
    "BatchResult",
]
