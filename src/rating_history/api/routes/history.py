"""Rating history API endpoint.

GET /api/players/{player_id}/rating-history - Buckets, window stats and win/loss bars
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from rating_history.aggregation.buckets import summarize_history
from rating_history.aggregation.window import (
    compute_window,
    full_window,
    rating_band_padding,
    win_loss_segments,
)
from rating_history.api.deps import get_feed
from rating_history.feeds import FeedBase, FeedFormatError, FeedNotFoundError
from rating_history.models.domain import Bucket, FeedKey, WinLossSegments, Window, WindowStats
from rating_history.models.types import (
    BucketDetail,
    RatingHistoryResponse,
    SegmentDetail,
    WindowStatsDetail,
    WinLossDetail,
)

logger = logging.getLogger(__name__)

router = APIRouter()

BOARD_SIZES = (0, 9, 13, 19)


def _bucket_detail(bucket: Bucket) -> BucketDetail:
    return BucketDetail(**asdict(bucket))


def _window_detail(stats: WindowStats) -> WindowStatsDetail:
    return WindowStatsDetail(
        start=stats.range_label_start,
        end=stats.range_label_end,
        rating_band_lower=stats.rating_band_lower,
        rating_band_upper=stats.rating_band_upper,
        scale_domain=rating_band_padding(stats),
        visible_day_buckets=stats.visible_day_buckets,
    )


def _win_loss_detail(segments: WinLossSegments) -> WinLossDetail:
    return WinLossDetail(
        period_start=segments.period_start,
        count=segments.count,
        wins=segments.wins,
        losses=segments.losses,
        weak_wins=SegmentDetail(**asdict(segments.weak_wins)),
        strong_wins=SegmentDetail(**asdict(segments.strong_wins)),
        weak_losses=SegmentDetail(**asdict(segments.weak_losses)),
        strong_losses=SegmentDetail(**asdict(segments.strong_losses)),
    )


@router.get("/players/{player_id}/rating-history", response_model=RatingHistoryResponse)
def get_rating_history(
    player_id: int,
    speed: Literal["overall", "blitz", "live", "correspondence"] = "overall",
    size: int = 0,
    start: datetime | None = None,
    end: datetime | None = None,
    width: float = Query(1.0, gt=0),
    feed: FeedBase = Depends(get_feed),
) -> RatingHistoryResponse:
    """Get aggregated rating history for a player.

    Args:
        player_id: Player to chart.
        speed: Time control bucket.
        size: Board size, 0 for all sizes.
        start: Optional window start. Defaults to the first game.
        end: Optional window end. Defaults to the last game.
        width: Scale for win/loss offsets and widths (1.0 = fractions).
        feed: Rating sample feed (injected).

    Returns:
        RatingHistoryResponse with buckets, window stats and bars.

    Raises:
        HTTPException: 404 if no history exists, 422 for bad size or
            malformed feed data.
    """
    if size not in BOARD_SIZES:
        raise HTTPException(status_code=422, detail=f"Unsupported board size: {size}")

    key = FeedKey(player_id=player_id, speed=speed, size=size)  # type: ignore[arg-type]
    try:
        samples = feed.fetch(key)
    except FeedNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except FeedFormatError as e:
        logger.warning(f"Malformed rating history for {key}: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    history = summarize_history(samples)
    full = full_window(history.samples)
    window = Window(start=start or full.start, end=end or full.end)
    stats = compute_window(history.samples, history.day_buckets, window)
    segments = win_loss_segments(history.month_buckets, window, width)

    return RatingHistoryResponse(
        player_id=player_id,
        speed=speed,
        size=size,  # type: ignore[arg-type]
        game_count=len(history.samples),
        days=[_bucket_detail(b) for b in history.day_buckets],
        months=[_bucket_detail(b) for b in history.month_buckets],
        window=_window_detail(stats),
        win_loss=[_win_loss_detail(s) for s in segments],
        rating_extent=history.rating_extent,
        count_extent=history.count_extent,
    )
