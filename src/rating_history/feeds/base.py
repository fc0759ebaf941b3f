"""Base feed interface.

A feed has a narrow interface: `fetch(key) -> samples`.
Feeds return samples in arrival order (newest-first) and must not
aggregate, window or shape output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rating_history.models.domain import FeedKey, Sample


class FeedError(Exception):
    """Base class for feed failures."""


class FeedNotFoundError(FeedError):
    """No rating history exists for the requested key."""


class FeedFormatError(FeedError, ValueError):
    """Raw feed data could not be parsed into samples."""


class FeedBase(ABC):
    """Abstract base class for rating sample feeds."""

    @abstractmethod
    def fetch(self, key: FeedKey) -> list[Sample]:
        """Fetch every sample for one player/speed/size.

        Args:
            key: Player, speed and board size to fetch.

        Returns:
            Samples in arrival order (newest-first).

        Raises:
            FeedNotFoundError: If no history exists for key.
            FeedFormatError: If the raw data is malformed.
        """
        pass
