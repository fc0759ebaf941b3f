"""In-memory feed for demos and testing."""

from __future__ import annotations

from typing import Mapping, Sequence

from rating_history.feeds.base import FeedBase, FeedNotFoundError
from rating_history.models.domain import FeedKey, Sample


class StaticFeed(FeedBase):
    """Feed backed by a fixed mapping of keys to samples."""

    def __init__(self, histories: Mapping[FeedKey, Sequence[Sample]]):
        self.histories = dict(histories)

    def fetch(self, key: FeedKey) -> list[Sample]:
        if key not in self.histories:
            raise FeedNotFoundError(f"No rating history for {key}")
        return list(self.histories[key])
