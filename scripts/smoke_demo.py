#!/usr/bin/env python3
"""Smoke test for the demo rating history feed.

Validates that the demo feed was seeded and that it aggregates into a
consistent chart payload.

Usage:
    python scripts/smoke_demo.py [--data-dir DIR]

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from rating_history.aggregation.buckets import summarize_history  # noqa: E402
from rating_history.aggregation.window import (  # noqa: E402
    compute_window,
    full_window,
    win_loss_segments,
)
from rating_history.feeds import FeedError, TsvFeed  # noqa: E402
from rating_history.models.domain import FeedKey, RatingHistory  # noqa: E402

# Constants
DEMO_DATA_DIR = PROJECT_ROOT / "demo_data"
DEMO_KEY = FeedKey(player_id=1, speed="overall", size=0)


def check_buckets(history: RatingHistory) -> bool:
    """Check bucket counts and key ordering."""
    ok = True
    for name, series in (("day", history.day_buckets), ("month", history.month_buckets)):
        total = sum(b.count for b in series)
        if total != len(history.samples):
            print(f"FAIL: {name} counts sum to {total}, expected {len(history.samples)}")
            ok = False
        keys = [b.period_start for b in series]
        if any(a >= b for a, b in zip(keys, keys[1:])):
            print(f"FAIL: {name} keys not strictly increasing")
            ok = False
        if series and series[0].increase is not None:
            print(f"FAIL: first {name} bucket has increase={series[0].increase}")
            ok = False
        if ok:
            print(f"OK: {len(series)} {name} buckets")
    return ok


def check_window(history: RatingHistory) -> bool:
    """Check full-window stats and segment geometry are finite."""
    window = full_window(history.samples)
    stats = compute_window(history.samples, history.day_buckets, window)
    print(f"    Band: {stats.rating_band_lower:.1f} .. {stats.rating_band_upper:.1f}")

    values = [stats.rating_band_lower, stats.rating_band_upper]
    for segments in win_loss_segments(history.month_buckets, window, width=1000):
        for seg in (
            segments.weak_wins,
            segments.strong_wins,
            segments.weak_losses,
            segments.strong_losses,
        ):
            values.extend([seg.offset, seg.width])

    if not all(math.isfinite(v) for v in values):
        print("FAIL: non-finite window values")
        return False
    print("OK: Window stats and segments finite")
    return True


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=DEMO_DATA_DIR, help="Feed root directory")
    args = parser.parse_args()

    print("=" * 60)
    print("Rating History Demo Smoke Test")
    print("=" * 60)

    print("\n[1/3] Loading demo feed...")
    try:
        samples = TsvFeed(args.data_dir).fetch(DEMO_KEY)
    except FeedError as e:
        print(f"FAIL: {e}")
        print("Run 'python scripts/seed_demo.py' first!")
        return 1
    print(f"OK: Loaded {len(samples)} samples")

    history = summarize_history(samples)
    checks = [
        ("[2/3] Checking buckets...", check_buckets),
        ("[3/3] Checking window...", check_window),
    ]
    failed = 0
    for title, check in checks:
        print(f"\n{title}")
        if not check(history):
            failed += 1

    print("\n" + "=" * 60)
    if failed == 0:
        print("RESULT: ALL PASSED")
        print("=" * 60)
        return 0
    print(f"RESULT: {failed} checks failed")
    print("=" * 60)
    return 1


if __name__ == "__main__":
    sys.exit(main())
