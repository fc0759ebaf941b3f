"""Visible-window statistics for the rating chart.

Computes the rating band extrema for a selected date range and the
horizontal geometry of the monthly win/loss bars. Everything here is a
pure recompute over its inputs, cheap enough to run on every brush move.

Degenerate input never raises:
- no samples: band collapses to (0.0, 0.0)
- no samples inside the window: band is the swapped global extrema
- zero-length or inverted window: widths and offsets are 0.0
"""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, timedelta, timezone
from typing import Sequence

import numpy as np

from rating_history.models.domain import (
    Bucket,
    Sample,
    Segment,
    WinLossSegments,
    Window,
    WindowStats,
)

# Vertical padding applied by callers when turning the band into a scale
RATING_AXIS_MARGIN = 0.05


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def full_window(samples: Sequence[Sample], now: datetime | None = None) -> Window:
    """Window spanning every sample's end time.

    With no samples this is a zero-length window at now (UTC).
    """
    if not samples:
        at = now or datetime.now(timezone.utc)
        return Window(start=at, end=at)
    ended = [s.ended_at for s in samples]
    return Window(start=min(ended), end=max(ended))


def band_arrays(samples: Sequence[Sample]) -> tuple[np.ndarray, np.ndarray]:
    """Per-sample (band_low, band_high) as float arrays."""
    lows = np.array([s.band_low for s in samples], dtype=float)
    highs = np.array([s.band_high for s in samples], dtype=float)
    return lows, highs


def band_extrema(lows: np.ndarray, highs: np.ndarray) -> tuple[float, float]:
    """Global (lower, upper) of the deviation envelope; (0.0, 0.0) when empty."""
    if lows.size == 0:
        return 0.0, 0.0
    return float(lows.min()), float(highs.max())


def compute_window(
    samples: Sequence[Sample],
    day_buckets: Sequence[Bucket],
    window: Window | None = None,
) -> WindowStats:
    """Compute band extrema and labels for the selected window.

    Samples outside the window are replaced by the opposite global
    extreme so they can never win the min (or max). When nothing is in
    range the result is (global_upper, global_lower).

    Args:
        samples: All samples of the fetched set.
        day_buckets: Day buckets built from the same samples.
        window: Selected range. Defaults to the full sample extent.

    Returns:
        WindowStats with unpadded extrema.
    """
    if window is None:
        window = full_window(samples)

    lows, highs = band_arrays(samples)
    global_lower, global_upper = band_extrema(lows, highs)
    lower, upper = global_upper, global_lower
    if samples:
        start = window.start.timestamp()
        end = window.end.timestamp()
        ended = np.array([s.ended_at.timestamp() for s in samples], dtype=float)
        in_range = (ended >= start) & (ended <= end)
        lower = float(np.where(in_range, lows, global_upper).min())
        upper = float(np.where(in_range, highs, global_lower).max())

    visible = sum(1 for b in day_buckets if window.contains(b.ended_at))

    return WindowStats(
        rating_band_lower=lower,
        rating_band_upper=upper,
        range_label_start=window.start,
        range_label_end=window.end,
        visible_day_buckets=visible,
    )


def rating_band_padding(
    stats: WindowStats,
    margin: float = RATING_AXIS_MARGIN,
) -> tuple[float, float]:
    """Padded vertical scale domain for a band."""
    return stats.rating_band_lower * (1 - margin), stats.rating_band_upper * (1 + margin)


def days_in_visible_range(window: Window) -> int:
    """Whole UTC days between the window's start and end dates."""
    return (window.end.date() - window.start.date()).days


def _month_bounds(period_start: date) -> tuple[datetime, datetime]:
    start = datetime(period_start.year, period_start.month, 1, tzinfo=timezone.utc)
    days = calendar.monthrange(period_start.year, period_start.month)[1]
    return start, start + timedelta(days=days)


def month_width_share(period_start: date, window: Window) -> float:
    """Fraction of the visible range taken by one calendar month.

    Returns 0.0 for zero-length or inverted windows.
    """
    days_in_range = days_in_visible_range(window)
    if days_in_range <= 0:
        return 0.0
    days_in_month = calendar.monthrange(period_start.year, period_start.month)[1]
    return _finite_or_zero(days_in_month / days_in_range)


def month_offset(period_start: date, alpha: float, window: Window) -> float:
    """Position of a point inside a month, as a fraction of the window.

    alpha=0 is the first instant of the month and alpha=1 the first
    instant of the next. Returns 0.0 for zero-length or inverted windows.
    """
    month_start, month_end = _month_bounds(period_start)
    at = month_start.timestamp() * (1 - alpha) + month_end.timestamp() * alpha
    span = window.end.timestamp() - window.start.timestamp()
    if span <= 0:
        return 0.0
    return _finite_or_zero((at - window.start.timestamp()) / span)


def _stack(
    period_start: date,
    window: Window,
    share: float,
    first: int,
    second: int,
    total: int,
    width: float,
) -> tuple[Segment, Segment]:
    divisor = total or 1
    split = first / divisor
    lower = Segment(
        offset=month_offset(period_start, 0, window) * width,
        width=_finite_or_zero(share * split * width),
    )
    upper = Segment(
        offset=month_offset(period_start, split, window) * width,
        width=_finite_or_zero(share * (second / divisor) * width),
    )
    return lower, upper


def win_loss_segments(
    month_buckets: Sequence[Bucket],
    window: Window,
    width: float = 1.0,
) -> list[WinLossSegments]:
    """Stacked win/loss bar geometry for each month bucket.

    Weak wins fill [0, weak_wins/wins) of the month slot and strong wins
    the rest; losses stack the same way. A zero wins or losses total is
    treated as divisor 1.

    Args:
        month_buckets: Month buckets to lay out.
        window: Currently visible range.
        width: Scale factor for offsets and widths. 1.0 yields fractions
            of the visible range.

    Returns:
        One WinLossSegments per month bucket, in input order.
    """
    segments = []
    for bucket in month_buckets:
        share = month_width_share(bucket.period_start, window)
        weak_wins, strong_wins = _stack(
            bucket.period_start, window, share,
            bucket.weak_wins, bucket.strong_wins, bucket.wins, width,
        )
        weak_losses, strong_losses = _stack(
            bucket.period_start, window, share,
            bucket.weak_losses, bucket.strong_losses, bucket.losses, width,
        )
        segments.append(
            WinLossSegments(
                period_start=bucket.period_start,
                count=bucket.count,
                wins=bucket.wins,
                losses=bucket.losses,
                weak_wins=weak_wins,
                strong_wins=strong_wins,
                weak_losses=weak_losses,
                strong_losses=strong_losses,
            )
        )
    return segments
