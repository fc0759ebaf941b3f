"""Aggregation module for rating history.

- buckets: day and month bucket series from ordered samples
- window: visible-range band extrema and win/loss geometry
- Forbidden: feed access, HTTP concerns, pixel rendering
"""
