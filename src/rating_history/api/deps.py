"""Request dependencies shared by the API routes."""

from __future__ import annotations

import os
from pathlib import Path

from rating_history.feeds import FeedBase, TsvFeed

# Default feed directory, overridable via RATING_HISTORY_DATA_DIR
DEFAULT_DATA_DIR = Path("data/rating-history")


def get_feed() -> FeedBase:
    """Dependency to get the rating sample feed.

    Returns:
        TSV feed rooted at RATING_HISTORY_DATA_DIR.
    """
    data_dir = Path(os.environ.get("RATING_HISTORY_DATA_DIR", str(DEFAULT_DATA_DIR)))
    return TsvFeed(data_dir)
