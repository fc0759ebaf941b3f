"""Day and month bucketing of rating samples.

Builds two independent bucket series from the same ordered sample pass.
Each step either appends a freshly opened bucket or replaces the last
bucket with a merged copy; closed buckets are never touched again.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Sequence

from rating_history.models.domain import Bucket, RatingHistory, Sample, as_utc

logger = logging.getLogger(__name__)

KeyFunc = Callable[[datetime], date]

# outcome -> (weak_wins, strong_wins, weak_losses, strong_losses)
_STRENGTH_TALLIES: dict[str, tuple[int, int, int, int]] = {
    "weak_win": (1, 0, 0, 0),
    "strong_win": (0, 1, 0, 0),
    "weak_loss": (0, 0, 1, 0),
    "strong_loss": (0, 0, 0, 1),
}


def _tallies(sample: Sample) -> tuple[int, int, int, int, int, int]:
    """(wins, losses, weak_wins, strong_wins, weak_losses, strong_losses) of one game."""
    wins = int(sample.won)
    return (wins, 1 - wins) + _STRENGTH_TALLIES[sample.outcome]


def day_key(ts: datetime) -> date:
    """UTC calendar day of ts."""
    return as_utc(ts).date()


def month_key(ts: datetime) -> date:
    """First day of the UTC calendar month of ts."""
    return as_utc(ts).date().replace(day=1)


def normalize_order(samples: Iterable[Sample]) -> list[Sample]:
    """Return samples in ascending ended_at order.

    The feed delivers newest-first, so a sequence whose first sample ended
    after its last one is reversed before the stable sort. Ties therefore
    keep their play order.
    """
    ordered = list(samples)
    if len(ordered) > 1 and ordered[0].ended_at > ordered[-1].ended_at:
        ordered.reverse()
    ordered.sort(key=lambda s: s.ended_at)
    return ordered


def open_bucket(sample: Sample, period_start: date) -> Bucket:
    """Start a new bucket seeded from a single sample."""
    wins, losses, weak_wins, strong_wins, weak_losses, strong_losses = _tallies(sample)
    return Bucket(
        period_start=period_start,
        ended_at=sample.ended_at,
        starting_rating=sample.starting_rating,
        starting_deviation=sample.deviation,
        rating=sample.rating,
        deviation=sample.deviation,
        count=1,
        wins=wins,
        losses=losses,
        weak_wins=weak_wins,
        strong_wins=strong_wins,
        weak_losses=weak_losses,
        strong_losses=strong_losses,
        increase=None,
    )


def merge_sample(bucket: Bucket, sample: Sample) -> Bucket:
    """Return a copy of bucket with sample folded in.

    Starting values stay with the first sample; rating and deviation
    follow the latest one.
    """
    wins, losses, weak_wins, strong_wins, weak_losses, strong_losses = _tallies(sample)
    return replace(
        bucket,
        ended_at=sample.ended_at,
        rating=sample.rating,
        deviation=sample.deviation,
        count=bucket.count + 1,
        wins=bucket.wins + wins,
        losses=bucket.losses + losses,
        weak_wins=bucket.weak_wins + weak_wins,
        strong_wins=bucket.strong_wins + strong_wins,
        weak_losses=bucket.weak_losses + weak_losses,
        strong_losses=bucket.strong_losses + strong_losses,
    )


def _bucket_series(
    samples: Sequence[Sample],
    key: KeyFunc,
    reset_single: bool,
) -> list[Bucket]:
    """Fold ordered samples into one bucket series.

    Args:
        samples: Samples in ascending ended_at order.
        key: Maps a timestamp to its bucket's period_start.
        reset_single: Force increase back to None while the series
            holds a single bucket (month behaviour).

    Returns:
        Bucket list with strictly increasing period_start.
    """
    series: list[Bucket] = []
    for sample in samples:
        period = key(sample.ended_at)
        if series and series[-1].period_start == period:
            series[-1] = merge_sample(series[-1], sample)
        else:
            series.append(open_bucket(sample, period))

        if len(series) >= 2:
            series[-1] = replace(series[-1], increase=series[-2].rating < series[-1].rating)
        elif reset_single:
            series[-1] = replace(series[-1], increase=None)
    return series


def aggregate_days(samples: Sequence[Sample]) -> list[Bucket]:
    """Day buckets for samples already in ascending order."""
    return _bucket_series(samples, day_key, reset_single=False)


def aggregate_months(samples: Sequence[Sample]) -> list[Bucket]:
    """Month buckets for samples already in ascending order."""
    return _bucket_series(samples, month_key, reset_single=True)


def aggregate(samples: Iterable[Sample]) -> tuple[list[Bucket], list[Bucket]]:
    """Group samples into day and month buckets.

    Samples may arrive newest-first; they are normalized to ascending
    order before bucketing.

    Args:
        samples: Rating samples for one player/speed/size.

    Returns:
        (day_buckets, month_buckets). Both empty for no samples.
    """
    ordered = normalize_order(samples)
    days = aggregate_days(ordered)
    months = aggregate_months(ordered)
    logger.debug(f"Aggregated {len(ordered)} samples into {len(days)} days, {len(months)} months")
    return days, months


def summarize_history(samples: Iterable[Sample]) -> RatingHistory:
    """Aggregate samples and compute the overview extents.

    rating_extent is the post-game rating range over all samples and
    count_extent the games-per-month range; both None when empty.
    """
    ordered = normalize_order(samples)
    days = aggregate_days(ordered)
    months = aggregate_months(ordered)

    rating_extent = None
    count_extent = None
    if ordered:
        ratings = [s.rating for s in ordered]
        rating_extent = (min(ratings), max(ratings))
        counts = [m.count for m in months]
        count_extent = (min(counts), max(counts))

    return RatingHistory(
        samples=tuple(ordered),
        day_buckets=tuple(days),
        month_buckets=tuple(months),
        rating_extent=rating_extent,
        count_extent=count_extent,
    )


def nearest_day_bucket(day_buckets: Sequence[Bucket], at: datetime) -> Bucket | None:
    """Find the day bucket closest to a cursor time.

    Times before the first bucket resolve to one of the first two buckets.
    Times past the last bucket, or a series with fewer than two buckets,
    return None.
    """
    if len(day_buckets) < 2:
        return None
    at = as_utc(at)
    i = bisect.bisect_left([b.ended_at for b in day_buckets], at, 1)
    if i >= len(day_buckets):
        return None
    before = day_buckets[i - 1]
    after = day_buckets[i]
    if at - before.ended_at > after.ended_at - at:
        return after
    return before
