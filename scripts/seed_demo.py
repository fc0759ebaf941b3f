#!/usr/bin/env python3
"""Seed a demo rating history feed.

Writes a synthetic TSV history for one demo player that the API can
serve through the default TSV feed.

Usage:
    python scripts/seed_demo.py [--games N] [--data-dir DIR]

Then run the API with RATING_HISTORY_DATA_DIR pointing at demo_data/.
"""

from __future__ import annotations

import argparse
import csv
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import numpy as np

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from rating_history.feeds.tsv import REQUIRED_COLUMNS  # noqa: E402
from rating_history.models.domain import FeedKey  # noqa: E402

# Constants
DEMO_DATA_DIR = PROJECT_ROOT / "demo_data"
DEMO_KEY = FeedKey(player_id=1, speed="overall", size=0)
DEMO_START = datetime(2024, 1, 1, tzinfo=timezone.utc)
DEMO_SEED = 42


def generate_rows(games: int, seed: int = DEMO_SEED) -> list[dict[str, str]]:
    """Generate newest-first TSV rows for a random rating walk."""
    rng = np.random.default_rng(seed)
    rating = 1500.0
    deviation = 350.0
    ended = DEMO_START
    rows = []
    for _ in range(games):
        ended += timedelta(hours=float(rng.exponential(20.0)))
        won = bool(rng.random() < 0.52)
        strong = bool(rng.random() < 0.4)
        step = float(rng.uniform(2.0, 25.0)) * (1 if won else -1)
        starting = rating
        rating = round(rating + step, 2)
        deviation = max(60.0, round(deviation * 0.97, 2))
        outcome = ("strong_" if strong else "weak_") + ("win" if won else "loss")
        rows.append(
            {
                "ended": str(int(ended.timestamp())),
                "rating": f"{rating:.2f}",
                "starting_rating": f"{starting:.2f}",
                "deviation": f"{deviation:.2f}",
                "outcome": outcome,
            }
        )
    rows.reverse()
    return rows


def write_feed(rows: list[dict[str, str]], data_dir: Path = DEMO_DATA_DIR) -> Path:
    """Write rows where TsvFeed expects the demo key."""
    path = data_dir / str(DEMO_KEY.player_id) / f"{DEMO_KEY.speed}-{DEMO_KEY.size}.tsv"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(REQUIRED_COLUMNS), delimiter="\t")
        writer.writeheader()
        writer.writerows(rows)
    return path


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--games", type=int, default=400, help="Number of games to generate")
    parser.add_argument("--data-dir", type=Path, default=DEMO_DATA_DIR, help="Feed root directory")
    args = parser.parse_args()

    path = write_feed(generate_rows(args.games), args.data_dir)
    print(f"Wrote {args.games} games to {path}")
    print(f"Serve with: RATING_HISTORY_DATA_DIR={args.data_dir} uvicorn rating_history.api.app:app")
    return 0


if __name__ == "__main__":
    sys.exit(main())
