"""API module for rating history.

API layer:
- Validates inputs, pulls samples from the feed
- Returns chart payloads for the UI
- Forbidden: pixel rendering, date formatting
"""
