"""TSV file feed.

Reads rating history exported as tab-separated values, one file per
player/speed/size:

    <data_dir>/<player_id>/<speed>-<size>.tsv

The header row must name the columns below; extra columns are ignored.
Rows are expected newest-first, as the rating history service emits them.
"""

from __future__ import annotations

import csv
import logging
import math
from datetime import datetime, timezone
from pathlib import Path

from rating_history.feeds.base import FeedBase, FeedFormatError, FeedNotFoundError
from rating_history.models.domain import FeedKey, Sample

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("ended", "rating", "starting_rating", "deviation", "outcome")

NUMERIC_COLUMNS = ("rating", "starting_rating", "deviation")


def parse_ended(value: str) -> datetime:
    """Parse an end time given as epoch seconds or ISO-8601."""
    value = value.strip()
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        pass
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_number(row: dict[str, str], column: str) -> float:
    """Parse a finite float from one column of a row."""
    value = float(row[column])
    if not math.isfinite(value):
        raise ValueError(f"non-finite {column}: {row[column].strip()!r}")
    return value


def parse_record(row: dict[str, str]) -> Sample:
    """Build a Sample from one TSV row.

    Raises:
        ValueError: If a field is missing, not parseable or a
            non-finite number.
    """
    missing = [c for c in REQUIRED_COLUMNS if not row.get(c)]
    if missing:
        raise ValueError(f"missing {', '.join(missing)}")
    numbers = {c: parse_number(row, c) for c in NUMERIC_COLUMNS}
    return Sample(
        ended_at=parse_ended(row["ended"]),
        **numbers,
        outcome=row["outcome"].strip(),  # type: ignore[arg-type]
    )


class TsvFeed(FeedBase):
    """Feed reading one TSV file per player/speed/size."""

    def __init__(self, data_dir: Path):
        """Initialize TSV feed.

        Args:
            data_dir: Root directory holding per-player folders.
        """
        self.data_dir = Path(data_dir)

    def path_for(self, key: FeedKey) -> Path:
        return self.data_dir / str(key.player_id) / f"{key.speed}-{key.size}.tsv"

    def fetch(self, key: FeedKey) -> list[Sample]:
        path = self.path_for(key)
        if not path.exists():
            raise FeedNotFoundError(f"No rating history for {key}")

        samples: list[Sample] = []
        with path.open(newline="") as f:
            reader = csv.DictReader(f, delimiter="\t")
            header = reader.fieldnames or []
            absent = [c for c in REQUIRED_COLUMNS if c not in header]
            if absent:
                raise FeedFormatError(f"{path}: missing columns {', '.join(absent)}")

            for row in reader:
                if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                    logger.warning(f"{path}:{reader.line_num}: skipping blank row")
                    continue
                try:
                    samples.append(parse_record(row))
                except ValueError as e:
                    raise FeedFormatError(f"{path}:{reader.line_num}: {e}") from e

        logger.debug(f"Loaded {len(samples)} samples from {path}")
        return samples
