"""Rating sample feeds.

Feeds wrap the rating history source behind `fetch(key) -> samples`.
Business logic should use a feed rather than reading files directly.
"""

from rating_history.feeds.base import FeedBase, FeedError, FeedFormatError, FeedNotFoundError
from rating_history.feeds.static import StaticFeed
from rating_history.feeds.tsv import TsvFeed

__all__ = [
    "FeedBase",
    "FeedError",
    "FeedFormatError",
    "FeedNotFoundError",
    "StaticFeed",
    "TsvFeed",
]
