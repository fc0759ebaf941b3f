"""Host-side state for one rating chart.

Holds the aggregated history for the current player/speed/size and the
selected window as ordinary values.

Architecture:
- begin_fetch: tags a new request and makes it the current one
- apply_fetch: rebuilds the whole history, unless a newer request exists
- select_window / clear_window: pure recompute over the held history
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from rating_history.aggregation.buckets import summarize_history
from rating_history.aggregation.window import compute_window, full_window, win_loss_segments
from rating_history.models.domain import (
    FeedKey,
    RatingHistory,
    Sample,
    WinLossSegments,
    Window,
    WindowStats,
)

logger = logging.getLogger(__name__)

EMPTY_HISTORY = RatingHistory(
    samples=(),
    day_buckets=(),
    month_buckets=(),
    rating_extent=None,
    count_extent=None,
)


@dataclass(frozen=True)
class FetchTicket:
    """Tag attached to one in-flight fetch."""

    key: FeedKey
    generation: int


class HistoryState:
    """Current rating history and window selection for one chart.

    Transport ordering is not guaranteed, so every fetch result is checked
    against the latest ticket before it replaces the held history.
    """

    def __init__(self) -> None:
        self._generations = itertools.count(1)
        self._latest: FetchTicket | None = None
        self.key: FeedKey | None = None
        self.history: RatingHistory = EMPTY_HISTORY
        self.window: Window | None = None

    def begin_fetch(self, key: FeedKey) -> FetchTicket:
        """Start a fetch for key, superseding any in-flight one."""
        ticket = FetchTicket(key=key, generation=next(self._generations))
        self._latest = ticket
        return ticket

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket == self._latest

    def apply_fetch(self, ticket: FetchTicket, samples: Iterable[Sample]) -> bool:
        """Replace the held history with a fetch result.

        Args:
            ticket: Ticket returned by begin_fetch for this request.
            samples: Samples in arrival order.

        Returns:
            True if applied, False if the ticket was superseded.
        """
        if not self.is_current(ticket):
            logger.info(
                f"Discarding stale fetch for {ticket.key} (generation {ticket.generation})"
            )
            return False

        self.key = ticket.key
        self.history = summarize_history(samples)
        self.window = None
        logger.debug(
            f"Applied fetch for {ticket.key}: {len(self.history.samples)} samples, "
            f"{len(self.history.day_buckets)} days"
        )
        return True

    @property
    def active_window(self) -> Window:
        """Selected window, or the full sample extent if none is selected."""
        if self.window is not None:
            return self.window
        return full_window(self.history.samples)

    def stats(self) -> WindowStats:
        return compute_window(self.history.samples, self.history.day_buckets, self.active_window)

    def select_window(self, start: datetime, end: datetime) -> WindowStats:
        """Select a sub-range and recompute its statistics."""
        self.window = Window(start=start, end=end)
        return self.stats()

    def clear_window(self) -> WindowStats:
        """Return to the full domain."""
        self.window = None
        return self.stats()

    def segments(self, width: float = 1.0) -> list[WinLossSegments]:
        """Win/loss bar geometry for the active window."""
        return win_loss_segments(self.history.month_buckets, self.active_window, width)
