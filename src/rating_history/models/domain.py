"""Domain models for rating history.

Pure Python dataclasses representing samples, buckets and windows.
All values are frozen; aggregation builds new instances instead of
mutating existing ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Literal


def as_utc(ts: datetime) -> datetime:
    """Return ts as an aware UTC datetime. Naive values are taken as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


# ============================================================================
# Sample Domain
# ============================================================================

Outcome = Literal["weak_win", "strong_win", "weak_loss", "strong_loss"]

OUTCOMES: tuple[Outcome, ...] = ("weak_win", "strong_win", "weak_loss", "strong_loss")


@dataclass(frozen=True)
class Sample:
    """One finished game and its effect on the player's rating."""

    ended_at: datetime
    rating: float
    starting_rating: float
    deviation: float
    outcome: Outcome

    def __post_init__(self) -> None:
        if self.outcome not in OUTCOMES:
            raise ValueError(f"Unknown outcome: {self.outcome!r}")
        object.__setattr__(self, "ended_at", as_utc(self.ended_at))

    @property
    def won(self) -> bool:
        return self.outcome in ("weak_win", "strong_win")

    @property
    def band_low(self) -> float:
        """Bottom of the deviation envelope for this game."""
        return min(self.starting_rating, self.rating) - self.deviation

    @property
    def band_high(self) -> float:
        """Top of the deviation envelope for this game."""
        return max(self.starting_rating, self.rating) + self.deviation


# ============================================================================
# Feed Domain
# ============================================================================

Speed = Literal["overall", "blitz", "live", "correspondence"]
BoardSize = Literal[0, 9, 13, 19]


@dataclass(frozen=True)
class FeedKey:
    """Identifies one fetched sample set."""

    player_id: int
    speed: Speed = "overall"
    size: BoardSize = 0


# ============================================================================
# Bucket Domain
# ============================================================================


@dataclass(frozen=True)
class Bucket:
    """Aggregate of all samples sharing a day or month key.

    Attributes:
        period_start: Canonical date of the bucket key (UTC).
        ended_at: End time of the most recently merged sample.
        starting_rating: Pre-game rating of the first merged sample.
        starting_deviation: Pre-game deviation of the first merged sample.
        rating: Post-game rating of the last merged sample.
        deviation: Deviation of the last merged sample.
        increase: Whether rating beat the previous bucket's rating.
            None when there is no previous bucket.
    """

    period_start: date
    ended_at: datetime
    starting_rating: float
    starting_deviation: float
    rating: float
    deviation: float
    count: int
    wins: int
    losses: int
    weak_wins: int
    strong_wins: int
    weak_losses: int
    strong_losses: int
    increase: bool | None = None


# ============================================================================
# Window Domain
# ============================================================================


@dataclass(frozen=True)
class Window:
    """Selected visible date range, inclusive on both ends.

    An inverted or zero-length window is a valid (degenerate) value.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_utc(self.start))
        object.__setattr__(self, "end", as_utc(self.end))

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end


@dataclass(frozen=True)
class WindowStats:
    """Visible-range statistics. Band extrema are unpadded."""

    rating_band_lower: float
    rating_band_upper: float
    range_label_start: datetime
    range_label_end: datetime
    visible_day_buckets: int = 0


@dataclass(frozen=True)
class Segment:
    """Horizontal placement of one bar segment."""

    offset: float
    width: float


@dataclass(frozen=True)
class WinLossSegments:
    """Stacked win/loss bar geometry for one month bucket."""

    period_start: date
    count: int
    wins: int
    losses: int
    weak_wins: Segment
    strong_wins: Segment
    weak_losses: Segment
    strong_losses: Segment


@dataclass(frozen=True)
class RatingHistory:
    """Everything derived from one fetched sample set."""

    samples: tuple[Sample, ...]
    day_buckets: tuple[Bucket, ...]
    month_buckets: tuple[Bucket, ...]
    rating_extent: tuple[float, float] | None
    count_extent: tuple[int, int] | None
