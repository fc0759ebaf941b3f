"""Shared pytest fixtures for rating history tests."""

from datetime import datetime, timezone

import pytest

from rating_history.models.domain import Sample


def make_sample(
    ended_at: datetime,
    starting_rating: float,
    rating: float,
    deviation: float = 80.0,
    outcome: str = "weak_win",
) -> Sample:
    """Build a Sample with compact positional arguments."""
    return Sample(
        ended_at=ended_at,
        rating=rating,
        starting_rating=starting_rating,
        deviation=deviation,
        outcome=outcome,
    )


def utc(*args: int) -> datetime:
    """Aware UTC datetime shorthand."""
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def scenario_samples() -> list[Sample]:
    """Two games on 2024-01-05 and one on 2024-02-01, ascending."""
    return [
        make_sample(utc(2024, 1, 5, 10), 1500, 1520, 80, "weak_win"),
        make_sample(utc(2024, 1, 5, 18), 1520, 1510, 75, "strong_loss"),
        make_sample(utc(2024, 2, 1, 12), 1510, 1530, 70, "strong_win"),
    ]


@pytest.fixture
def month_spread_samples() -> list[Sample]:
    """Games spread over three months with mixed outcomes."""
    return [
        make_sample(utc(2024, 1, 3), 1500, 1510, 100, "weak_win"),
        make_sample(utc(2024, 1, 3, 5), 1510, 1520, 98, "strong_win"),
        make_sample(utc(2024, 1, 20), 1520, 1505, 96, "weak_loss"),
        make_sample(utc(2024, 2, 10), 1505, 1490, 94, "strong_loss"),
        make_sample(utc(2024, 2, 11), 1490, 1480, 92, "weak_loss"),
        make_sample(utc(2024, 3, 1), 1480, 1495, 90, "weak_win"),
    ]
