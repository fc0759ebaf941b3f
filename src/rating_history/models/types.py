"""Pydantic models for the rating history API.

Response payloads consumed by the chart adapter. Timestamps are raw;
display formatting belongs to the client.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel


class BucketDetail(BaseModel):
    """Day or month bucket for API response."""

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
    increase: bool | None


class WindowStatsDetail(BaseModel):
    """Visible-window statistics.

    rating_band_* are unpadded; scale_domain is the padded vertical
    domain a chart should use.
    """

    start: datetime
    end: datetime
    rating_band_lower: float
    rating_band_upper: float
    scale_domain: tuple[float, float]
    visible_day_buckets: int


class SegmentDetail(BaseModel):
    """Horizontal placement of one bar segment."""

    offset: float
    width: float


class WinLossDetail(BaseModel):
    """Stacked win/loss bars for one month."""

    period_start: date
    count: int
    wins: int
    losses: int
    weak_wins: SegmentDetail
    strong_wins: SegmentDetail
    weak_losses: SegmentDetail
    strong_losses: SegmentDetail


class RatingHistoryResponse(BaseModel):
    """Full chart payload for one player/speed/size."""

    player_id: int
    speed: Literal["overall", "blitz", "live", "correspondence"]
    size: Literal[0, 9, 13, 19]
    game_count: int
    days: list[BucketDetail]
    months: list[BucketDetail]
    window: WindowStatsDetail
    win_loss: list[WinLossDetail]
    rating_extent: tuple[float, float] | None
    count_extent: tuple[int, int] | None
